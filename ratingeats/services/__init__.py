"""Domain services shared by the API handlers"""
