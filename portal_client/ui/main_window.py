from __future__ import annotations

import threading
import traceback
from typing import Any, Callable

import customtkinter as ctk

from portal_client.apis import (
	AccountingApi,
	DashboardApi,
	HrApi,
	ItApi,
	MarketingApi,
	OperationsApi,
	SalesApi,
	UserApi,
)
from portal_client.auth import AuthManager
from portal_client.config import AppSettings, ConfigurationError
from portal_client.errors import PortalApiError
from portal_client.http import HttpClient
from portal_client.logging_utils import configure_logging
from portal_client.models import AuthState, ListView
from portal_client.pagination import PagedList, PaginationMode, PaginationState
from portal_client.permissions import check_permission
from portal_client.services import PortalService
from portal_client.session import build_session


def describe_page(state: PaginationState) -> str:
	suffix = ", estimated" if state.mode is PaginationMode.ESTIMATED else ""
	return f"Page {state.page} of {state.total_pages} ({state.total_items} items{suffix})"


def format_rows(view: ListView, items: list[Any]) -> str:
	if not items:
		return "No records."
	rows = [view.columns] + [view.row(item) for item in items]
	widths = [max(len(row[index]) for row in rows) for index in range(len(view.columns))]
	lines = ["  ".join(cell.ljust(widths[index]) for index, cell in enumerate(row)) for row in rows]
	lines.insert(1, "  ".join("-" * width for width in widths))
	return "\n".join(lines)


class ListPanel(ctk.CTkFrame):
	def __init__(self, parent, window: "MainWindow", view: ListView, paged_list: PagedList):
		super().__init__(parent)
		self._window = window
		self._view = view
		self._paged_list = paged_list

		controls = ctk.CTkFrame(self)
		controls.pack(fill="x", padx=8, pady=(8, 4))

		self._previous_btn = ctk.CTkButton(controls, text="Previous", width=90, command=self._previous)
		self._previous_btn.pack(side="left", padx=(8, 4), pady=8)
		self._next_btn = ctk.CTkButton(controls, text="Next", width=90, command=self._next)
		self._next_btn.pack(side="left", padx=4, pady=8)
		self._refresh_btn = ctk.CTkButton(controls, text="Refresh", width=90, command=self.refresh)
		self._refresh_btn.pack(side="left", padx=4, pady=8)

		self._page_label = ctk.CTkLabel(controls, text="Not loaded")
		self._page_label.pack(side="left", padx=12)

		self._error_label = ctk.CTkLabel(self, text="", text_color="#d14343")
		self._error_label.pack(anchor="w", padx=12)

		self._output = ctk.CTkTextbox(self, height=420, font=("Consolas", 12))
		self._output.pack(fill="both", expand=True, padx=8, pady=(4, 8))
		self._set_buttons(has_previous=False, has_next=False)

	def refresh(self):
		self._load(self._paged_list.refresh)

	def reset(self):
		self._paged_list.reset()
		self._refresh_btn.configure(state="normal")
		self._page_label.configure(text="Not loaded")
		self._error_label.configure(text="")
		self._render("")
		self._set_buttons(has_previous=False, has_next=False)

	def _previous(self):
		self._load(self._paged_list.previous_page)

	def _next(self):
		self._load(self._paged_list.next_page)

	def _load(self, action: Callable[[], PaginationState]):
		self._error_label.configure(text="")
		self._set_buttons(has_previous=False, has_next=False)
		self._refresh_btn.configure(state="disabled")
		self._window.run_in_background(action, self._on_loaded, self._on_failed)

	def _on_loaded(self, state: PaginationState):
		self._refresh_btn.configure(state="normal")
		self._page_label.configure(text=describe_page(state))
		self._render(format_rows(self._view, self._paged_list.items))
		self._set_buttons(has_previous=state.has_previous, has_next=state.has_next)

	def _on_failed(self, message: str):
		self._refresh_btn.configure(state="normal")
		self._error_label.configure(text=message)
		state = self._paged_list.state
		self._set_buttons(has_previous=state.has_previous, has_next=state.has_next)

	def _set_buttons(self, has_previous: bool, has_next: bool):
		self._previous_btn.configure(state="normal" if has_previous else "disabled")
		self._next_btn.configure(state="normal" if has_next else "disabled")

	def _render(self, text: str):
		self._output.configure(state="normal")
		self._output.delete("1.0", "end")
		self._output.insert("1.0", text)
		self._output.configure(state="disabled")


class MainWindow(ctk.CTk):
	def __init__(self, service: PortalService):
		super().__init__()
		self._service = service
		self.title("Business Portal")
		self.geometry("1100x760")
		self.minsize(900, 620)

		self._status_label = ctk.CTkLabel(self, text="Not signed in")
		self._status_label.pack(anchor="w", padx=16, pady=(16, 8))

		sign_in_row = ctk.CTkFrame(self)
		sign_in_row.pack(fill="x", padx=16, pady=(0, 8))

		self._email = ctk.CTkEntry(sign_in_row, placeholder_text="Email", width=240)
		self._email.pack(side="left", padx=(8, 6), pady=8)
		self._password = ctk.CTkEntry(sign_in_row, placeholder_text="Password", show="*", width=180)
		self._password.pack(side="left", padx=6, pady=8)

		self._sign_in_btn = ctk.CTkButton(sign_in_row, text="Sign in", command=self._sign_in)
		self._sign_in_btn.pack(side="left", padx=6, pady=8)
		self._sign_out_btn = ctk.CTkButton(sign_in_row, text="Sign out", command=self._sign_out)
		self._sign_out_btn.pack(side="left", padx=6, pady=8)

		self._sign_in_error = ctk.CTkLabel(self, text="", text_color="#d14343")
		self._sign_in_error.pack(anchor="w", padx=16)

		self._tabview = ctk.CTkTabview(self)
		self._tabview.pack(fill="both", expand=True, padx=16, pady=(0, 16))

		self._panels: dict[str, ListPanel] = {}
		for view in service.list_views():
			self._tabview.add(view.title)
			panel = ListPanel(self._tabview.tab(view.title), self, view, service.paged_list(view.key))
			panel.pack(fill="both", expand=True)
			self._panels[view.key] = panel

		self._refresh_auth_state()

	def run_in_background(
		self,
		action: Callable[[], Any],
		on_success: Callable[[Any], None],
		on_error: Callable[[str], None],
	):
		def worker():
			try:
				result = action()
			except PortalApiError as exc:
				message = exc.message
				self.after(0, lambda: on_error(message))
			except Exception as exc:
				details = "".join(traceback.format_exception_only(type(exc), exc)).strip()
				self.after(0, lambda: on_error(f"Unexpected error: {details}"))
			else:
				self.after(0, lambda: on_success(result))

		threading.Thread(target=worker, daemon=True).start()

	def on_session_expired(self):
		# Called from a worker thread by the HTTP client.
		self.after(0, self._show_session_expired)

	def _show_session_expired(self):
		for panel in self._panels.values():
			panel.reset()
		self._refresh_auth_state()
		self._sign_in_error.configure(text="Your session has expired. Please sign in again.")

	def _refresh_auth_state(self):
		state = self._service.auth_state()
		self._set_auth_button_state(state.is_signed_in)
		if not state.is_signed_in:
			self._status_label.configure(text="Not signed in")
			return

		details = [state.name or state.email or "Signed in", state.role or "User"]
		if state.department:
			details.append(state.department)
		self._status_label.configure(text="Signed in: " + " | ".join(details))

	def _set_auth_button_state(self, is_signed_in: bool):
		self._sign_in_btn.configure(state="disabled" if is_signed_in else "normal")
		self._sign_out_btn.configure(state="normal" if is_signed_in else "disabled")

	def _sign_in(self):
		email = self._email.get()
		password = self._password.get()
		self._sign_in_error.configure(text="")
		self._sign_in_btn.configure(state="disabled")
		self.run_in_background(
			lambda: self._service.sign_in(email, password),
			self._on_signed_in,
			self._on_sign_in_failed,
		)

	def _on_signed_in(self, state: AuthState):
		self._password.delete(0, "end")
		self._refresh_auth_state()
		user = {"role": state.role}
		for view in self._service.list_views():
			if not view.required_roles or check_permission(user, view.required_roles):
				self._panels[view.key].refresh()

	def _on_sign_in_failed(self, message: str):
		self._sign_in_error.configure(text=message)
		self._refresh_auth_state()

	def _sign_out(self):
		self._service.sign_out()
		for panel in self._panels.values():
			panel.reset()
		self._refresh_auth_state()


def build_service(settings: AppSettings) -> tuple[PortalService, HttpClient]:
	session = build_session(settings.session_path)
	http_client = HttpClient(settings, session)
	auth_manager = AuthManager(UserApi(settings, http_client), session)
	service = PortalService(
		auth_manager=auth_manager,
		hr_api=HrApi(settings, http_client),
		sales_api=SalesApi(settings, http_client),
		it_api=ItApi(settings, http_client),
		marketing_api=MarketingApi(settings, http_client),
		operations_api=OperationsApi(settings, http_client),
		accounting_api=AccountingApi(settings, http_client),
		dashboard_api=DashboardApi(settings, http_client),
		page_size=settings.page_size,
		count_probe_limit=settings.count_probe_limit,
		request_timeout_seconds=settings.timeout_seconds,
	)
	return service, http_client


def run_app() -> None:
	ctk.set_appearance_mode("System")
	ctk.set_default_color_theme("blue")

	try:
		settings = AppSettings.from_env()
	except ConfigurationError as exc:
		configure_logging()
		app = ctk.CTk()
		app.title("Business Portal - Configuration Error")
		app.geometry("760x320")
		message = ctk.CTkTextbox(app)
		message.pack(fill="both", expand=True, padx=16, pady=16)
		message.insert(
			"1.0",
			"Configuration error. Fix the environment variables and restart:\n\n"
			f"{exc}\n\n"
			"Common settings:\n"
			"- PORTAL_API_URL\n"
			"- PORTAL_TIMEOUT_SECONDS\n"
			"- PORTAL_PAGE_SIZE\n",
		)
		app.mainloop()
		return

	configure_logging(settings.log_level)
	service, http_client = build_service(settings)
	window = MainWindow(service)
	http_client.set_session_expired_handler(window.on_session_expired)
	window.mainloop()
