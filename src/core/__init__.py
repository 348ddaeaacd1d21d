"""Core domain package for newsdesk.

Core contains moderation, statistics, and the news store without any UI or
storage-specific code, keeping the business logic portable.
"""
