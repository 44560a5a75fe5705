"""
Streamlit Frontend for Video Editor Books

The screens a freelance editor uses day to day:
1. Clients - search, add, see who owes what
2. Client - projects, payments, per-client report, delete
3. Reports - daily payments workbook

Every mutation is followed by st.rerun(), which re-reads the books
from storage. Nothing displayed here is updated in place.
"""

from datetime import date
from decimal import Decimal

import streamlit as st

from videobooks.audit import AuditLogger
from videobooks.config import get_settings
from videobooks.orchestrator import (
    ClientFlow,
    LedgerFlow,
    ReportFlow,
    create_app_components,
)
from videobooks.services.reports import NothingToExportError
from videobooks.services.storage import StorageError
from videobooks.validation import RecordValidationError


st.set_page_config(
    page_title="Video Editor Books",
    page_icon="🎬",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_components():
    """Get or create application components (cached, one store per process)."""
    return create_app_components(use_storage=True)


def check_storage(components) -> None:
    """Stop the page if the data document cannot be read."""
    try:
        components.storage.get_clients()
    except StorageError as e:
        AuditLogger().log_error(
            error_type=type(e).__name__,
            error_message=str(e),
        )
        st.error(f"Failed to open the data file: {e}")
        st.info("Fix or restore the file, then reload this page. Nothing has been changed.")
        st.stop()


def money(value: Decimal) -> str:
    return f"${value:,.2f}"


def show_validation_error(error: RecordValidationError) -> None:
    for issue in error.result.issues:
        if issue.severity == "error":
            st.error(issue.message)


def show_storage_error(action: str, error: StorageError) -> None:
    st.error(f"Failed to {action}. Please try again. ({error})")
    if get_settings().app.debug_mode:
        st.exception(error)


def main():
    """Main application entry point."""
    components = get_components()
    check_storage(components)

    st.sidebar.title("🎬 Video Editor Books")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["👥 Clients", "📁 Client Details", "📊 Reports"],
        index=0,
    )

    if page == "👥 Clients":
        render_clients_page(components.client_flow)
    elif page == "📁 Client Details":
        render_client_page(
            components.client_flow,
            components.ledger_flow,
            components.report_flow,
        )
    elif page == "📊 Reports":
        render_reports_page(components.report_flow)


def render_clients_page(client_flow: ClientFlow):
    """Client list with search, totals and an add form."""
    st.title("👥 Clients")

    with st.form("add_client", clear_on_submit=True):
        name = st.text_input("Client Name *")
        if st.form_submit_button("➕ Add Client", type="primary"):
            try:
                client = client_flow.add_client(name)
                st.success(f"Client {client.name} added")
                st.rerun()
            except RecordValidationError as e:
                show_validation_error(e)
            except StorageError as e:
                show_storage_error("add client", e)

    search = st.text_input("🔍 Search clients", placeholder="Type a name...")

    try:
        summaries = client_flow.list_summaries(search)
    except StorageError as e:
        show_storage_error("load clients", e)
        return

    if not summaries:
        st.info("No clients yet. Add your first client above.")
        return

    st.dataframe(
        [
            {
                "Client": s.client.name,
                "Added": s.client.created_at.strftime("%d %b %Y"),
                "Projects": s.total_projects,
                "Earned": money(s.total_earned),
                "Paid": money(s.total_paid),
                "Outstanding": money(s.outstanding_balance),
            }
            for s in summaries
        ],
        use_container_width=True,
    )


def render_client_page(
    client_flow: ClientFlow,
    ledger_flow: LedgerFlow,
    report_flow: ReportFlow,
):
    """One client's projects and payments."""
    st.title("📁 Client Details")

    try:
        clients = client_flow.list_clients()
    except StorageError as e:
        show_storage_error("load clients", e)
        return

    if not clients:
        st.info("No clients yet. Add one on the Clients page.")
        return

    client = st.selectbox("Client", options=clients, format_func=lambda c: c.name)
    ledger = client_flow.get_ledger(client.id)
    if ledger is None:
        st.warning("Client not found. It may have just been deleted.")
        return

    summary = ledger.summary
    st.caption(f"Client since {summary.client.created_at.strftime('%d %B %Y')}")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Earned", money(summary.total_earned))
    col2.metric("Total Paid", money(summary.total_paid))
    col3.metric("Outstanding", money(summary.outstanding_balance))

    projects_tab, payments_tab = st.tabs(["Projects", "Payments"])

    with projects_tab:
        with st.form("add_project", clear_on_submit=True):
            count = st.number_input("Number of Videos *", min_value=0, step=1)
            rate = st.number_input("Charge per Video *", min_value=0.0, step=1.0, format="%.2f")
            if st.form_submit_button("➕ Add Project", type="primary"):
                try:
                    project = ledger_flow.add_project(client.id, count, Decimal(str(rate)))
                    st.success(f"Project added (Total: {money(project.total)})")
                    st.rerun()
                except RecordValidationError as e:
                    show_validation_error(e)
                except StorageError as e:
                    show_storage_error("add project", e)

        for project in ledger.projects:
            cols = st.columns([2, 1, 2, 2, 1])
            cols[0].write(project.created_at.strftime("%d %b %Y"))
            cols[1].write(project.number_of_videos)
            cols[2].write(money(project.charge_per_video))
            cols[3].write(money(project.total))
            if cols[4].button("🗑️", key=f"del_project_{project.id}"):
                try:
                    ledger_flow.delete_project(project.id)
                    st.rerun()
                except StorageError as e:
                    show_storage_error("delete project", e)

    with payments_tab:
        with st.form("add_payment", clear_on_submit=True):
            amount = st.number_input("Amount *", min_value=0.0, step=1.0, format="%.2f")
            paid_on = st.date_input("Payment Date", value=date.today())
            notes = st.text_area("Notes (optional)")
            if st.form_submit_button("➕ Record Payment", type="primary"):
                try:
                    payment = ledger_flow.record_payment(
                        client.id, Decimal(str(amount)), paid_on, notes
                    )
                    st.success(f"Payment of {money(payment.amount)} recorded")
                    st.rerun()
                except RecordValidationError as e:
                    show_validation_error(e)
                except StorageError as e:
                    show_storage_error("record payment", e)

        for payment in ledger.payments:
            cols = st.columns([2, 2, 3, 1])
            cols[0].write(payment.date.strftime("%d %b %Y"))
            cols[1].write(money(payment.amount))
            cols[2].write(payment.notes if payment.notes is not None else "-")
            if cols[3].button("🗑️", key=f"del_payment_{payment.id}"):
                try:
                    ledger_flow.delete_payment(payment.id)
                    st.rerun()
                except StorageError as e:
                    show_storage_error("delete payment", e)

    st.markdown("---")
    col1, col2 = st.columns(2)

    with col1:
        try:
            report = report_flow.client_report(client.id)
        except StorageError as e:
            show_storage_error("build the client report", e)
            report = None
        if report is not None:
            st.download_button(
                "📥 Download Client Report",
                data=report.content,
                file_name=report.filename,
                mime=report.media_type,
            )

    with col2:
        confirm = st.checkbox("Also delete all projects and payments of this client")
        if st.button("❌ Delete Client", disabled=not confirm):
            try:
                client_flow.delete_client(client.id)
                st.rerun()
            except StorageError as e:
                show_storage_error("delete client", e)


def render_reports_page(report_flow: ReportFlow):
    """Daily payments report."""
    st.title("📊 Reports")

    day = st.date_input("Payments received on", value=date.today())

    try:
        report = report_flow.daily_report(day)
    except NothingToExportError:
        st.info(f"No payments recorded on {day.strftime('%d %B %Y')}. Nothing to export.")
        return
    except StorageError as e:
        show_storage_error("load payments", e)
        return

    st.download_button(
        "📥 Download Daily Report",
        data=report.content,
        file_name=report.filename,
        mime=report.media_type,
    )


if __name__ == "__main__":
    main()
