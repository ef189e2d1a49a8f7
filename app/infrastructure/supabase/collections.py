"""Supabase collection (table) names searched by the portal.

Use these constants so collection names stay consistent across adapters
and tests.
"""

COLLECTION_NOTES = "notes"
COLLECTION_EVENTS = "events"
COLLECTION_LOST_FOUND = "lost_found"

# Author profile embedded on detail lookups (PostgREST resource embedding).
AUTHOR_PROFILE_EMBED = "profiles(full_name,username)"
