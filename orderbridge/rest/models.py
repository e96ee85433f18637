from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SyncResult(BaseModel):
    store: Optional[str] = None
    fetched: int = 0
    saved: int = 0
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)
    records: Dict[str, List[Dict[str, str]]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class WebhookOrderRef(BaseModel):
    order_id: str
    order_name: Optional[str] = None
    topic: Optional[str] = None
    shop_domain: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)
