# Event names & error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_ENTRIES = 'MISSING_ENTRIES'
INVALID_ENTRY = 'INVALID_ENTRY'
TOO_MANY_ENTRIES = 'TOO_MANY_ENTRIES'
ENTRIES_REJECTED = 'ENTRIES_REJECTED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
SHORTEN_PARTIAL_SUCCESS = 'SHORTEN_PARTIAL_SUCCESS'

# Per-entry outcome reported in the response body
STATUS_CREATED = 'created'
STATUS_INVALID = 'invalid'
STATUS_FAILED = 'failed'
