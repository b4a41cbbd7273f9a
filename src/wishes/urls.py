WISHES_URL_PREFIX = "/api/wishes"

SUBMIT_WISH_URL = "/api/wishes/submit"
CHECK_RATE_LIMIT_URL = "/api/wishes/check-rate-limit"
CLEANUP_RATE_LIMITS_URL = "/api/wishes/cleanup"
LIST_WISHES_URL = "/api/wishes/{project_id}"
