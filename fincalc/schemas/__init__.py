"""Request and response envelopes for the HTTP API."""
