"""
Package marker for the external data clients.
`power_client` wraps NASA POWER and `geo_client` wraps the CountryStateCity catalog.
"""
