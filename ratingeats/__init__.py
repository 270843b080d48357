"""RatingEats API"""
