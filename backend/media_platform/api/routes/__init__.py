"""API Routes — one router per aggregate, registered explicitly in main.py."""
