"""Adapter models and schemas."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
import uuid


class AdapterCategory(str, Enum):
    """Categories of adapters."""
    AI = "ai"
    COMMUNICATION = "communication"
    INTEGRATION = "integration"


class AdapterCapability(BaseModel):
    """A capability provided by an adapter."""
    name: str
    description: str
    category: str = "general"

    # Parameters for this capability
    parameters: Dict[str, Any] = {}
    required_parameters: List[str] = []

    # Response format
    response_format: Dict[str, Any] = {}


class AdapterConfig(BaseModel):
    """Configuration for an adapter instance.

    Holds no credentials: every operation receives its token from the caller.
    """
    name: str
    version: str = "1.0.0"
    description: Optional[str] = None
    category: AdapterCategory

    # Connection settings
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = None

    # Custom settings
    custom_config: Dict[str, Any] = {}


class AdapterRequest(BaseModel):
    """Request to an adapter."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    capability: str
    parameters: Dict[str, Any] = {}

    # Context
    context: Dict[str, Any] = {}


class AdapterResponse(BaseModel):
    """Response from an adapter."""
    request_id: str
    capability: str
    status: str = "success"  # success, error

    # Response data
    data: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    # Metadata
    duration_ms: float
    metadata: Dict[str, Any] = {}


class AdapterInfo(BaseModel):
    """Information about a registered adapter."""
    id: str
    name: str
    category: AdapterCategory
    version: str
    description: Optional[str] = None
    base_url: str

    # Capabilities
    capabilities: List[AdapterCapability] = []

    # Registration
    registered_at: datetime = Field(default_factory=datetime.utcnow)
