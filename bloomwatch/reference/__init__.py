"""
Package marker for static reference data.
`geodata` holds the country/state/city catalog and `regions` the seeded bloom regions.
"""
