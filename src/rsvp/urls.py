SUBMIT_RSVP_URL = "/api/rsvp/submit"
RSVP_SUMMARY_URL = "/api/rsvp/{project_id}/summary"
