"""Application constants."""

# HTTP
DEFAULT_PORT = 4000

# Tokens expire one day after issue
TOKEN_EXPIRE_MINUTES = 60 * 24
JWT_ALGORITHM = "HS256"

# bcrypt work factor
PASSWORD_HASH_ROUNDS = 10

# Input limits
NAME_MIN_LENGTH = 2
PHONE_MIN_LENGTH = 10
PASSWORD_MIN_LENGTH = 8
