from __future__ import annotations

from typing import Any

from portal_client.apis.base import DomainApi
from portal_client.endpoints import resolve
from portal_client.envelope import Empty, Items


class AccountingApi(DomainApi):
    """Invoice endpoints.

    Failed writes raise ``PortalApiError`` whose ``field_errors`` map invoice
    fields (``client_name``, ``amount``, ``due_date``...) to messages, so a form
    can mark each field.
    """

    loose_field_error_keys = True

    def list_invoices(self) -> Items | Empty:
        return self._list(resolve("accounting.invoices"), "Failed to fetch invoices", optional=True)

    def add_invoice(self, invoice_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("accounting.add_invoice"), "Failed to create invoice", payload=invoice_data)

    def update_invoice(self, invoice_id: str, update_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("accounting.update_invoice", id=invoice_id),
            "Failed to update invoice",
            payload=update_data,
        )

    def delete_invoice(self, invoice_id: str) -> Any:
        return self._record("DELETE", resolve("accounting.delete_invoice", id=invoice_id), "Failed to delete invoice")
