"""
API Module
---------
Provides RESTful API endpoints for a trip session using FastAPI.
Features include:
- Resolving a picked point into an address and confirming or naming it
- Listing and deleting saved trips
- Sorting trips by distance from a point or the reported device position
- Reporting the device location state
"""
