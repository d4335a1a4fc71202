# This file marks the services package for API business logic modules.
# Routers depend on these service classes instead of calling upstream clients directly.
