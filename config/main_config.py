import os


# MySQL is the authoritative store for teams, members, join requests and quiz results
DB_HOST = os.getenv('DB_HOST', 'localhost')
DB_PORT = int(os.getenv('DB_PORT', '3306'))
DB_USER = os.getenv('DB_USER', 'root')
DB_PASSWORD = os.getenv('DB_PASSWORD', '')
DB_NAME = os.getenv('DB_NAME', 'career_guidance')

# Redis keeps cached snapshots and per-user notification lists
REDIS_HOST = os.getenv('REDIS_HOST', 'localhost')
REDIS_PORT = int(os.getenv('REDIS_PORT', '6379'))
REDIS_DB = int(os.getenv('REDIS_DB', '0'))
CACHE_TTL_SECONDS = int(os.getenv('CACHE_TTL_SECONDS', '3600'))

# OpenAI-compatible chat completions endpoint used by the AI career quiz
LLM_URL = os.getenv('LLM_URL', 'http://localhost:1234/v1/chat/completions')
LLM_MODEL = os.getenv('LLM_MODEL', 'hugging-quants/Llama-3.2-1B-Instruct-Q8_0-GGUF/llama-3.2-1b-instruct-q8_0.gguf')
LLM_API_KEY = os.getenv('LLM_API_KEY')
LLM_TEMPERATURE = float(os.getenv('LLM_TEMPERATURE', '0.3'))
LLM_MAX_TOKENS = int(os.getenv('LLM_MAX_TOKENS', '1024'))

LOG_FILE = os.getenv('LOG_FILE', 'app.log')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

DEFAULT_TOP_N = int(os.getenv('DEFAULT_TOP_N', '3'))
