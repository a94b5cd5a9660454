"""
File Service

A REST facade for binary file assets stored as blobs in a relational
database, on SQL Server or PostgreSQL.
"""

__version__ = "1.0.0"
