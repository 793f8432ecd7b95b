from dataclasses import dataclass

from fastapi import Header, HTTPException

from app.auth import decode_session_token


@dataclass
class SessionUser:
    id: int
    email: str
    first_name: str
    last_name: str


async def get_current_user(authorization: str = Header(default="")) -> SessionUser:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    claims = decode_session_token(token.strip())
    return SessionUser(
        id=int(claims["sub"]),
        email=claims.get("email", ""),
        first_name=claims.get("first_name", ""),
        last_name=claims.get("last_name", ""),
    )
