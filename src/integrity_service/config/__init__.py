"""Service configuration"""
