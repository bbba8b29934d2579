"""Core application plumbing: config, database, security, errors"""
