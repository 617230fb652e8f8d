"""LinkedIn endpoints used by the api source"""

OAUTH_TOKEN_URL = 'https://www.linkedin.com/oauth/v2/accessToken'
API_BASE_URL = 'https://api.linkedin.com/v2'
UGC_POSTS_URL = f'{API_BASE_URL}/ugcPosts'

RESTLI_PROTOCOL_VERSION = '2.0.0'
