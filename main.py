"""
Main entrypoint for the My Trips API.

Usage:
    Run directly (`python main.py`) or with uvicorn (`uvicorn my_trips.api.app:app`).
"""
import uvicorn

from my_trips import config


def main():
    """
    Main function to serve the API.
    """
    try:
        print(f"Starting My Trips API on {config.API_HOST}:{config.API_PORT}...")
        uvicorn.run("my_trips.api.app:app", host=config.API_HOST, port=config.API_PORT, log_level=config.LOG_LEVEL.lower())
        return 0
    except Exception as e:
        print(f"An error occurred in the main function: {str(e)}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    print(f"Exiting with code {exit_code}")
