"""Cart module"""
