"""
Supabase client: auth (sign in, sign out, token verification, password update),
storefront tables (accounts, ads, rank_boost, admin_users) and image storage.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from supabase import Client, create_client

from storefront.core.config import get_settings
from storefront.core.constants import (
    ACCOUNTS_TABLE,
    ADMIN_USERS_TABLE,
    ADS_TABLE,
    RANK_BOOST_TABLE,
)

logger = logging.getLogger(__name__)


class StorageRemovalError(Exception):
    """Raised when objects could not be removed from a storage bucket."""

    def __init__(self, message: str, bucket: str, names: list[str]) -> None:
        self.message = message
        self.bucket = bucket
        self.names = names
        super().__init__(message)


class SupabaseService:
    def __init__(
        self,
        client: Optional[Client] = None,
        auth_client: Optional[Client] = None,
    ) -> None:
        settings = get_settings()
        self.client: Client = client or create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY or settings.SUPABASE_ANON_KEY,
        )
        self.auth_client: Client = auth_client or create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
        )

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """Sign in an admin with the hosted auth service."""
        try:
            response = self.auth_client.auth.sign_in_with_password(
                {
                    "email": email,
                    "password": password,
                }
            )
        except Exception as e:
            logger.error("Signin error: %s", str(e))
            message = str(e)
            if "Email not confirmed" in message:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Please confirm your email address before logging in.",
                )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password. Please check your credentials.",
            )

        if not response.user or not response.session:
            logger.warning("No session after login for %s", email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Login incomplete. Please try again.",
            )

        return {
            "user": response.user,
            "session": response.session,
        }

    async def sign_out(self, access_token: str) -> bool:
        """Revoke the session behind access_token."""
        try:
            self.client.auth.admin.sign_out(access_token)
            return True
        except Exception as e:
            logger.error("Signout error: %s", str(e))
            return False

    async def verify_token(self, access_token: str) -> Any:
        """Verify access token with the auth service and return the user."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            logger.error("Token verification error: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
            )

        if not response or not response.user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
            )
        return response.user

    async def check_password(self, email: str, password: str) -> bool:
        """Return True if email/password is a valid hosted-auth login."""
        try:
            response = self.auth_client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
            return bool(response.user)
        except Exception as e:
            logger.info("Password check failed for %s: %s", email, str(e))
            return False

    async def update_password(self, user_id: str, new_password: str) -> bool:
        """Set a new password for the given user."""
        try:
            self.client.auth.admin.update_user_by_id(
                user_id,
                {
                    "password": new_password,
                },
            )
            return True
        except Exception as e:
            logger.error("Password update error: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Failed to update password: {e}",
            )

    async def get_admin_user(self, email: str) -> Optional[Dict[str, Any]]:
        """Row from the legacy admin_users table, or None."""
        response = (
            self.client.table(ADMIN_USERS_TABLE)
            .select("id, email, password_hash")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return response.data[0]
        return None

    # -------------------------------------------------------------------------
    # Accounts (accounts table)
    # -------------------------------------------------------------------------

    async def list_accounts(
        self,
        limit: int,
        offset: int,
        category: Optional[str] = None,
        collector_level: Optional[str] = None,
    ) -> tuple[list[Dict[str, Any]], int]:
        """Newest-first page of listings. Returns (rows, total_count)."""
        try:
            q = (
                self.client.table(ACCOUNTS_TABLE)
                .select("*", count="exact")
                .order("created_at", desc=True)
            )
            if category:
                q = q.eq("category", category)
            if collector_level:
                q = q.eq("collector_level", collector_level)
            response = q.range(offset, offset + limit - 1).execute()
            total = response.count if response.count is not None else len(response.data or [])
            return list(response.data or []), total
        except Exception as e:
            logger.error("List accounts error: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error fetching accounts",
            )

    async def latest_accounts(self, category: str, limit: int) -> list[Dict[str, Any]]:
        try:
            response = (
                self.client.table(ACCOUNTS_TABLE)
                .select("*")
                .eq("category", category)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return list(response.data or [])
        except Exception as e:
            logger.error("Latest accounts error: %s", str(e))
            return []

    async def search_accounts(self, query: str) -> list[Dict[str, Any]]:
        """Unsold listings whose title contains query (case-insensitive)."""
        try:
            response = (
                self.client.table(ACCOUNTS_TABLE)
                .select("*")
                .ilike("title", f"%{query}%")
                .eq("is_sold", False)
                .order("created_at", desc=True)
                .execute()
            )
            return list(response.data or [])
        except Exception as e:
            logger.error("Search accounts error: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error searching accounts",
            )

    async def get_account(self, account_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = (
                self.client.table(ACCOUNTS_TABLE)
                .select("*")
                .eq("id", account_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("Get account error: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error loading account",
            )
        if response.data:
            return response.data[0]
        return None

    async def insert_account(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.client.table(ACCOUNTS_TABLE).insert(data).execute()
        except Exception as e:
            logger.error("Insert account error: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving account",
            )
        if response.data:
            return response.data[0]
        return data

    async def update_account(self, account_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = (
                self.client.table(ACCOUNTS_TABLE)
                .update(data)
                .eq("id", account_id)
                .execute()
            )
        except Exception as e:
            logger.error("Update account %s error: %s", account_id, str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving account",
            )
        if response.data:
            return response.data[0]
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        )

    async def delete_account(self, account_id: str) -> bool:
        """Delete a listing row. Returns True if a row was removed."""
        try:
            response = (
                self.client.table(ACCOUNTS_TABLE)
                .delete()
                .eq("id", account_id)
                .execute()
            )
            return bool(response.data)
        except Exception as e:
            logger.error("Delete account %s error: %s", account_id, str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error deleting account",
            )

    async def list_expired_accounts(self, cutoff_iso: str) -> list[Dict[str, Any]]:
        """Listings marked for deletion strictly before cutoff."""
        try:
            response = (
                self.client.table(ACCOUNTS_TABLE)
                .select("id, images, deleted_at")
                .lt("deleted_at", cutoff_iso)
                .execute()
            )
            return list(response.data or [])
        except Exception as e:
            logger.error("List expired accounts error: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error cleaning up expired accounts",
            )

    async def delete_account_if_expired(
        self, account_id: str, cutoff_iso: str
    ) -> Optional[Dict[str, Any]]:
        """Delete the row only if it is still marked before cutoff. Returns the deleted row."""
        response = (
            self.client.table(ACCOUNTS_TABLE)
            .delete()
            .eq("id", account_id)
            .lt("deleted_at", cutoff_iso)
            .execute()
        )
        if response.data:
            return response.data[0]
        return None

    # -------------------------------------------------------------------------
    # Ads (ads table)
    # -------------------------------------------------------------------------

    async def list_ads(self, active_only: bool = False) -> list[Dict[str, Any]]:
        try:
            q = self.client.table(ADS_TABLE).select("*")
            if active_only:
                q = q.eq("is_active", True)
            response = q.order("order_index").execute()
            return list(response.data or [])
        except Exception as e:
            logger.error("Error fetching ads: %s", str(e))
            if active_only:
                return []
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error fetching ads",
            )

    async def get_ad(self, ad_id: str) -> Optional[Dict[str, Any]]:
        response = (
            self.client.table(ADS_TABLE)
            .select("*")
            .eq("id", ad_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return response.data[0]
        return None

    async def insert_ad(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.client.table(ADS_TABLE).insert(data).execute()
        except Exception as e:
            logger.error("Error saving ad: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving ad",
            )
        if response.data:
            return response.data[0]
        return data

    async def update_ad(self, ad_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = (
                self.client.table(ADS_TABLE)
                .update(data)
                .eq("id", ad_id)
                .execute()
            )
        except Exception as e:
            logger.error("Error saving ad %s: %s", ad_id, str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving ad",
            )
        if response.data:
            return response.data[0]
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ad not found",
        )

    async def delete_ad(self, ad_id: str) -> bool:
        try:
            response = (
                self.client.table(ADS_TABLE)
                .delete()
                .eq("id", ad_id)
                .execute()
            )
            return bool(response.data)
        except Exception as e:
            logger.error("Error deleting ad %s: %s", ad_id, str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error deleting ad",
            )

    # -------------------------------------------------------------------------
    # Rank boosts (rank_boost table)
    # -------------------------------------------------------------------------

    async def list_rank_boosts(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> tuple[list[Dict[str, Any]], int]:
        """Newest-first rank boosts; paginated when limit is given."""
        try:
            q = (
                self.client.table(RANK_BOOST_TABLE)
                .select("*", count="exact")
                .order("created_at", desc=True)
            )
            if limit is not None:
                q = q.range(offset, offset + limit - 1)
            response = q.execute()
            total = response.count if response.count is not None else len(response.data or [])
            return list(response.data or []), total
        except Exception as e:
            logger.error("Error fetching rank boosts: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error fetching rank boosts",
            )

    async def insert_rank_boost(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.client.table(RANK_BOOST_TABLE).insert(data).execute()
        except Exception as e:
            logger.error("Error saving rank boost: %s", str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving rank boost",
            )
        if response.data:
            return response.data[0]
        return data

    async def update_rank_boost(self, boost_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = (
                self.client.table(RANK_BOOST_TABLE)
                .update(data)
                .eq("id", boost_id)
                .execute()
            )
        except Exception as e:
            logger.error("Error saving rank boost %s: %s", boost_id, str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error saving rank boost",
            )
        if response.data:
            return response.data[0]
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rank boost not found",
        )

    async def delete_rank_boost(self, boost_id: str) -> bool:
        try:
            response = (
                self.client.table(RANK_BOOST_TABLE)
                .delete()
                .eq("id", boost_id)
                .execute()
            )
            return bool(response.data)
        except Exception as e:
            logger.error("Error deleting rank boost %s: %s", boost_id, str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error deleting rank boost",
            )

    # -------------------------------------------------------------------------
    # Storage (accounts-images / ads-images buckets)
    # -------------------------------------------------------------------------

    def public_url(self, bucket: str, key: str) -> str:
        url = self.client.storage.from_(bucket).get_public_url(key)
        return url.rstrip("?")

    def upload_object(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str,
    ) -> str:
        """Upload bytes under key and return the object's public URL."""
        try:
            self.client.storage.from_(bucket).upload(
                path=key,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "false",
                },
            )
        except Exception as e:
            logger.error("Upload to %s/%s failed: %s", bucket, key, str(e))
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Image upload failed",
            )
        return self.public_url(bucket, key)

    def remove_objects(self, bucket: str, names: list[str]) -> int:
        """Remove objects by name. Returns how many names were submitted."""
        if not names:
            return 0
        try:
            self.client.storage.from_(bucket).remove(names)
        except Exception as e:
            raise StorageRemovalError(str(e), bucket=bucket, names=names) from e
        return len(names)


def get_supabase_service() -> SupabaseService:
    """Dependency for FastAPI."""
    return SupabaseService()
