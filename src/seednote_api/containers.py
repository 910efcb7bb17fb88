"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from seednote_api.adapters.supabase_file_storage import SupabaseFileStorage
from seednote_api.adapters.supabase_metadata_repository import (
    SupabaseMetadataRepository,
)
from seednote_api.adapters.supabase_share_repository import SupabaseShareRepository
from seednote_api.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from seednote_api.config import Settings
from seednote_api.services.access import AccessAuthorizer
from seednote_api.services.files import FileStorage
from seednote_api.services.identity import IdentityVerifier
from seednote_api.services.relay import RelayService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    identity_verifier: IdentityVerifier
    access_authorizer: AccessAuthorizer
    file_storage: FileStorage
    relay_service: RelayService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    metadata_repository = SupabaseMetadataRepository(supabase_client)
    share_repository = SupabaseShareRepository(supabase_client)
    file_storage = SupabaseFileStorage(
        client=supabase_client, bucket=resolved_settings.storage_bucket
    )
    telegram_client = HttpxTelegramClient.create(resolved_settings.bot_token)
    identity_verifier = IdentityVerifier(
        bot_token=resolved_settings.bot_token,
        max_age_seconds=resolved_settings.init_data_max_age_seconds,
    )
    access_authorizer = AccessAuthorizer(metadata_repository)
    relay_service = RelayService(
        telegram_client=telegram_client,
        delivery_repository=share_repository,
    )

    async def close_resources() -> None:
        await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        telegram_client=telegram_client,
        identity_verifier=identity_verifier,
        access_authorizer=access_authorizer,
        file_storage=file_storage,
        relay_service=relay_service,
        close_resources=close_resources,
    )
