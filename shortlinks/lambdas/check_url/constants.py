# Event names & error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_URL = 'MISSING_URL'
URL_CHECKED = 'URL_CHECKED'
