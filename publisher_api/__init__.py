"""
Publisher catalog HTTP API (FastAPI + asyncpg).
"""
