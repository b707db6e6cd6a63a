from fastapi import Depends, Header, HTTPException, Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from food_ordering.database import get_db
from food_ordering.models import User


def get_current_user_id(
    request: Request,
    authorization: str = Header(None),
    db: Session = Depends(get_db),
) -> str:
    """Decode the bearer token and map its subject to a local user id."""
    try:
        scheme, token = (authorization or "").split()
        if scheme.lower() != "bearer":
            raise ValueError("not a bearer token")
        claims = jwt.decode(token, request.app.state.settings.jwt_secret, algorithms=["HS256"])
    except (ValueError, JWTError):
        raise HTTPException(status_code=401, detail="Invalid or missing token")

    user = db.query(User).filter_by(auth_id=claims.get("sub")).first()
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user.id
