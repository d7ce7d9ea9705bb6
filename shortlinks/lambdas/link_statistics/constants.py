# Event names & error codes
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
STATISTICS_SUCCESS = 'STATISTICS_SUCCESS'
