"""Sample configuration file written on request."""

DEFAULT_YAML_CONFIG_VALUE = """
# Keys are the same as the environment variable names.
# Environment variables take precedence over this file.

# Retrieval strategy: 'api' or 'browser'
FEED_SOURCE: browser
# Where the feed is written
FEED_OUTPUT_PATH: linkedin-feed.json

# --- api strategy ---
# Organization URN, e.g. urn:li:organization:123456
LINKEDIN_ORG_URN: ''
# Pre-issued token, skips the client credentials exchange
LINKEDIN_ACCESS_TOKEN: ''
LINKEDIN_CLIENT_ID: ''
LINKEDIN_CLIENT_SECRET: ''
LINKEDIN_API_PAGE_SIZE: 50

# --- browser strategy ---
LINKEDIN_COMPANY_URL: https://www.linkedin.com/company/dklinity/
MAX_POSTS: 20
SCROLL_TIMEOUT_MS: 30000
# JSON array of cookies captured from a logged-in session
LINKEDIN_COOKIES_JSON: ''
LINKEDIN_DEFAULT_AUTHOR: Dklinity
BROWSER_HEADLESS: true

# --- network ---
HTTP_TIMEOUT_SECONDS: 60
# 1 means a single attempt
HTTP_RETRY_ATTEMPTS: 1
"""
