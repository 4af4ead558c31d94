from decouple import config

API_URL = config('CHAT_API_URL', default='http://127.0.0.1:8000').rstrip('/')
WS_URL = config('CHAT_WS_URL', default='ws://127.0.0.1:8000').rstrip('/')
REQUEST_TIMEOUT = config('CHAT_REQUEST_TIMEOUT', default=10, cast=int)
