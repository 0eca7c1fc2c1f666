"""
Configuration Module
------------------
Runtime settings read from the environment.
"""
import os

NOMINATIM_BASE_URL = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org/reverse")
# Nominatim's usage policy requires an identifying client label
USER_AGENT = os.getenv("GEOCODING_USER_AGENT", "MyTripsApp/1.0")
REQUEST_TIMEOUT = float(os.getenv("GEOCODING_TIMEOUT", "10"))

GEOCODING_PROVIDER = os.getenv("GEOCODING_PROVIDER", "nominatim").lower()

GOOGLE_GEOCODING_URL = os.getenv("GOOGLE_GEOCODING_URL", "https://maps.googleapis.com/maps/api/geocode/json")
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
