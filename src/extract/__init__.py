"""
Extract Layer - Pure I/O to External APIs

This layer handles all external data fetching with no business logic.
- No imports from transform or load layers
- Keepa client returns raw payloads, the fetcher validates them
- Raises RemoteApiError / MissingDataError on unusable responses
"""
