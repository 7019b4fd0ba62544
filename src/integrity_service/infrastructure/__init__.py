"""Infrastructure adapters: database and object storage"""
