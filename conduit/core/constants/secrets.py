"""Constants shared by everything that handles secret configuration values."""

# Stand-in returned to clients for any secret value already stored server-side.
# Sending it back means "keep what is stored".
SECRETS_MASK = "**********"
