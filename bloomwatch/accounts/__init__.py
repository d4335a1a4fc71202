"""
Package marker for identity and per-user records.
Sign-up, sign-in, profiles, activity history and contact messages all live in Firebase,
reached through its REST endpoints.
"""
