from __future__ import annotations

import logging

import requests

from ..models.config_models import ApiConfig
from ..models.order import OrderRecord
from .base import SubmitOutcome, UploadPayload

"""HTTP order store backed by the order-storage REST service.

- POST {base}/orders/import  multipart file (the cleaned CSV)
- POST {base}/orders         JSON OrderRecord
"""

__all__ = [
    "ApiOrderStore",
    "IMPORT_PATH",
    "ORDERS_PATH",
]

IMPORT_PATH = "/orders/import"
ORDERS_PATH = "/orders"
DEFAULT_IMPORT_FAILURE = "Failed to import orders"
DEFAULT_CREATE_FAILURE = "Failed to create order"

logger = logging.getLogger(__name__)


class ApiOrderStore:
    def __init__(self, config: ApiConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + path

    def _headers(self) -> dict[str, str]:
        if self.config.token:
            return {"Authorization": f"Bearer {self.config.token}"}
        return {}

    def submit_batch(self, payload: UploadPayload) -> SubmitOutcome:
        # Content-Type は requests が multipart boundary 付きで設定する
        files = {"file": (payload.file_name, payload.text.encode("utf-8"), "text/csv")}
        try:
            res = self.session.post(
                self._url(IMPORT_PATH),
                files=files,
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error(f"import request failed: {e}")
            return SubmitOutcome.failure(str(e) or DEFAULT_IMPORT_FAILURE)
        if not res.ok:
            return SubmitOutcome.failure(res.text or DEFAULT_IMPORT_FAILURE)
        return SubmitOutcome.success(_json_or_text(res))

    def create_order(self, record: OrderRecord) -> SubmitOutcome:
        try:
            res = self.session.post(
                self._url(ORDERS_PATH),
                json=record.to_payload(),
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error(f"create request failed: {e}")
            return SubmitOutcome.failure(f"{DEFAULT_CREATE_FAILURE}: {e}")
        if not res.ok:
            return SubmitOutcome.failure(f"{DEFAULT_CREATE_FAILURE}: {res.text}")
        return SubmitOutcome.success(_json_or_text(res))


def _json_or_text(res: requests.Response):
    try:
        return res.json()
    except ValueError:
        return res.text
