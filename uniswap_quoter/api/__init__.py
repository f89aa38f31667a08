"""
HTTP layer for the swap quoter

schemas is importable without FastAPI; the app lives in api.main.
"""
