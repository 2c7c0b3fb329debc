"""
Core dependencies for route protection and admin checks
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import List, Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (roles)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def is_super_user(user_data: dict) -> bool:
    """Check if user is a super user from app_metadata"""
    # app_metadata is set server-side and cannot be modified by users
    app_metadata = user_data.get("app_metadata") or {}
    return app_metadata.get("type") == "super_user"


def get_user_roles(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> List[str]:
    """Return role names from user_roles. Uses request-scoped cache when provided."""
    if cache is not None and "roles" in cache:
        return cache["roles"]
    try:
        result = supabase.table("user_roles")\
            .select("role")\
            .eq("user_id", user_id)\
            .execute()
        roles = [r["role"] for r in (result.data or [])]
        if cache is not None:
            cache["roles"] = roles
        return roles
    except Exception as e:
        logger.error(f"Error getting user roles: {e}")
        return []


def require_admin(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_service_supabase)
) -> dict:
    """Dependency that only lets workshop admins (or super users) through."""
    if is_super_user(user_data):
        return user_data
    roles = get_user_roles(user_data["id"], supabase, _get_request_cache(request))
    allowed = settings.get_admin_roles_list()
    if not any(role in allowed for role in roles):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Admin role required. Allowed: {', '.join(allowed)}"
        )
    return user_data
