# This file marks the routers package for API route modules.
# Endpoint modules are grouped by feature area: geography, climate, map, insights, dashboard, accounts.
