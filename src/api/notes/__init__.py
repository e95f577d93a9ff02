"""Notes bounded context.

Tenant-owned notes with plan-based quotas. Every read is confined to the
caller's tenant; every mutation additionally to the caller's own notes.
"""
