"""Operator authentication by API key."""
from __future__ import annotations

import hmac
from typing import Literal, Optional

from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel

from apps.api.deps import get_settings
from core.settings import AppSettings


OperatorRole = Literal["merchant", "admin"]


class Operator(BaseModel):
    role: OperatorRole
    id: str


def _auth_error(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def _extract_api_key(authorization: Optional[str], x_api_key: Optional[str]) -> Optional[str]:
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise _auth_error("invalid authorization header")
        return token.strip()
    if x_api_key and x_api_key.strip():
        return x_api_key.strip()
    return None


def _operator_from_api_key(api_key: str, settings: AppSettings) -> Optional[Operator]:
    auth = settings.auth
    candidates = (
        (auth.admin_api_key, Operator(role="admin", id=auth.admin_actor_id)),
        (auth.merchant_api_key, Operator(role="merchant", id=auth.merchant_actor_id)),
    )
    for key, operator in candidates:
        if key and hmac.compare_digest(key.encode(), api_key.encode()):
            return operator
    return None


def get_operator(
    authorization: Optional[str] = Header(default=None),
    x_api_key: Optional[str] = Header(default=None),
    settings: AppSettings = Depends(get_settings),
) -> Operator:
    if not settings.auth.enabled:
        return Operator(role="admin", id=settings.auth.admin_actor_id)

    api_key = _extract_api_key(authorization, x_api_key)
    if not api_key:
        raise _auth_error("missing api key")

    operator = _operator_from_api_key(api_key, settings)
    if operator is None:
        raise _auth_error("invalid api key")
    return operator
