"""Service layer exports."""

from .admin import AdminChannelService
from .credentials import (
    CredentialFileStore,
    CredentialManager,
    CredentialSource,
    ServiceAccountCredentialSource,
)
from .intake import IntakeService, PlaceholderChannel
from .provisioning import ChannelProvisioningService, ChannelSetupRequest
from .record_store import ClientRecordRepository, SheetsClientRecordStore
from .token_cipher import TokenCipherService

__all__ = [
    "AdminChannelService",
    "ChannelProvisioningService",
    "ChannelSetupRequest",
    "ClientRecordRepository",
    "CredentialFileStore",
    "CredentialManager",
    "CredentialSource",
    "IntakeService",
    "PlaceholderChannel",
    "ServiceAccountCredentialSource",
    "SheetsClientRecordStore",
    "TokenCipherService",
]
