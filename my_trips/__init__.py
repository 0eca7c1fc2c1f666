"""
My Trips
--------
Pick a point, reverse-geocode it into an address and keep a session-scoped
list of named trips that can be ordered by distance from the user.
"""
__version__ = "1.0.0"
