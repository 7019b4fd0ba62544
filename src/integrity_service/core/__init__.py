"""Digest engine, identity generation, integrity workflow and aggregation"""
