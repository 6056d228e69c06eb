import os
import secrets
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

basic_security = HTTPBasic(realm="timeid")

DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "admin123"


def admin_credentials():
    """Admin username and password, read from the environment on each call."""
    return (os.environ.get("TIMEID_ADMIN_USERNAME", DEFAULT_USERNAME),
            os.environ.get("TIMEID_ADMIN_PASSWORD", DEFAULT_PASSWORD))


def verify_basic_auth(credentials: HTTPBasicCredentials = Depends(basic_security)):
    username, password = admin_credentials()
    correct_username = secrets.compare_digest(credentials.username.encode(), username.encode())
    correct_password = secrets.compare_digest(credentials.password.encode(), password.encode())
    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
