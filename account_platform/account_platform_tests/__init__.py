"""
account_service tests

Covers the core backend of the account service:

- FastAPI application and HTTP surface (`main.py`)
- SQLAlchemy models and database integration (`models.py`, `db.py`)
- Credential, session and profile services (`credentials.py`, `sessions.py`, `profile.py`)
- Error taxonomy and status mapping (`errors.py`)
"""
