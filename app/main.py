"""
Streamlit Frontend for Smart Expense Tracker

This is a thin shell over TrackerSession. Everything with rules in it
(validation, persistence, chart layout) lives in the expense_tracker
package; this file only wires widgets to session calls.

Run with:
    streamlit run app/main.py
"""

from datetime import date
from pathlib import Path

import streamlit as st

from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.exceptions import InvalidEntryError, StorageWriteError
from expense_tracker.models.transaction import TransactionKind
from expense_tracker.orchestrator import TrackerSession, create_session


# Page configuration
st.set_page_config(
    page_title="Smart Expense Tracker",
    page_icon="💰",
    layout="wide",
)

ALL_CATEGORIES = "All"


@st.cache_resource
def get_session() -> TrackerSession:
    """Get or create the tracker session (cached for the server process)."""
    return create_session()


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title("💰 Smart Expense Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "➕ Add Transaction", "📋 Transactions", "⚙️ Settings"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard_page(session)
    elif page == "➕ Add Transaction":
        render_add_page(session)
    elif page == "📋 Transactions":
        render_transactions_page(session)
    elif page == "⚙️ Settings":
        render_settings_page(session)


def _money(value) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{value:,.2f}"


def render_dashboard_page(session: TrackerSession):
    """Totals and the expense pie chart."""
    st.title("📊 Dashboard")

    summary = session.summary()
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", _money(summary.total_income))
    col2.metric("Total Expense", _money(summary.total_expense))
    col3.metric("Balance", _money(summary.balance))

    st.markdown("---")
    layout = session.chart_layout()
    if layout.no_expense_data:
        st.info("No expense data to display")
        return

    st.pyplot(session.chart_figure())


def render_add_page(session: TrackerSession):
    """Entry form."""
    st.title("➕ Add Transaction")

    with st.form("add_transaction", clear_on_submit=True):
        entry_date = st.date_input("Date", value=date.today())
        category = st.text_input("Category")
        description = st.text_input("Description")
        amount = st.text_input("Amount", placeholder="e.g. 12.50")
        kind = st.selectbox(
            "Type",
            options=[TransactionKind.EXPENSE, TransactionKind.INCOME],
            format_func=lambda k: k.value,
        )
        submitted = st.form_submit_button("Add", type="primary")

    if not submitted:
        return

    try:
        transaction = session.add_entry(entry_date, category, description, amount, kind)
    except InvalidEntryError as e:
        st.error("Invalid input:\n\n" + "\n".join(f"- {i.message}" for i in e.issues))
        return
    except StorageWriteError as e:
        st.warning(f"Added, but failed to save transactions: {e}")
        return

    st.success(
        f"Added {transaction.kind.value.lower()} of {_money(transaction.amount)} "
        f"in '{transaction.category}'"
    )


def render_transactions_page(session: TrackerSession):
    """Table with category filter, delete and export."""
    st.title("📋 Transactions")

    selected = st.selectbox(
        "Filter by category:",
        options=[ALL_CATEGORIES] + session.categories(),
    )
    category = None if selected == ALL_CATEGORIES else selected

    # Keep store positions so deletes hit the right row under a filter
    rows = [
        (index, t)
        for index, t in enumerate(session.transactions())
        if category is None or t.category == category
    ]

    if not rows:
        st.info("No transactions yet. Use 'Add Transaction' to record one.")
    else:
        st.dataframe(
            [
                {
                    "#": index,
                    "Date": t.date.isoformat(),
                    "Category": t.category,
                    "Description": t.description,
                    "Amount": f"{t.amount:.2f}",
                    "Type": t.kind.value,
                }
                for index, t in rows
            ],
            hide_index=True,
            use_container_width=True,
        )

        st.markdown("### Delete")
        position = st.selectbox(
            "Transaction to delete",
            options=[index for index, _ in rows],
            format_func=lambda i: _row_label(session, i),
        )
        confirm = st.checkbox("Yes, delete the selected transaction")
        if st.button("🗑️ Delete Selected", disabled=not confirm):
            try:
                session.delete(position)
            except StorageWriteError as e:
                st.warning(f"Deleted, but failed to save transactions: {e}")
            st.rerun()

    st.markdown("---")
    st.markdown("### Export")
    default_path = get_settings().storage.export_dir / "transactions_export.csv"
    target = st.text_input("Export to file", value=str(default_path))
    if st.button("📤 Export CSV"):
        path = Path(target)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            count = session.export(path)
        except (OSError, StorageWriteError) as e:
            st.error(f"Failed to export: {e}")
        else:
            st.success(f"Exported {count} transactions to {path.resolve()}")


def _row_label(session: TrackerSession, index: int) -> str:
    t = session.transactions()[index]
    return f"#{index}  {t.date}  {t.category}  {t.amount:.2f} {t.kind.value}"


def render_settings_page(session: TrackerSession):
    """Configuration status and recent audit events."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")
    status = validate_all_settings()
    for name in ("storage", "logging", "chart", "app"):
        if status.get(name, False):
            st.success(f"✅ {name}")
        else:
            st.error(f"❌ {name} - {status.get(f'{name}_error', 'Not configured')}")

    st.markdown(f"**Data file:** `{session.store.storage.location}`")
    if session.store.skipped_lines:
        st.warning(f"{session.store.skipped_lines} malformed lines were skipped on load")
    if not session.store.writable:
        st.error("The data file could not be read. Changes are kept in memory and will not be saved until it can be loaded.")

    if session.audit_logger:
        with st.expander("🔍 Recent Activity"):
            for event in reversed(session.audit_logger.history[-20:]):
                st.markdown(f"- `{event.timestamp:%H:%M:%S}` {event.description}")

    st.markdown("---")
    st.markdown(
        "Settings come from `EXPENSE_TRACKER_*` environment variables or a "
        "`.env` file. See `.env.example`."
    )


if __name__ == "__main__":
    main()
