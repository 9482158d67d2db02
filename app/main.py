"""
Streamlit Frontend for the Finance Tracker

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every change goes to the store first, then the list is reloaded
3. Invalid input is explained, never silently fixed
4. Totals always reflect the list currently on screen

The UI only renders state and issues commands to ``FinanceSession``.
Labels follow ``Preferences.language``, page styling follows
``Preferences.theme``.
"""

import asyncio
from datetime import date
from typing import Callable

import streamlit as st

from finance_tracker.config import (
    PreferencesStore,
    get_settings,
    translator,
    validate_all_settings,
)
from finance_tracker.models.transaction import (
    DEFAULT_CATEGORY,
    PaymentMethod,
    Transaction,
    TransactionType,
    categories_for,
)
from finance_tracker.orchestrator import FinanceSession, create_app_components
from finance_tracker.queries import cash_direction
from finance_tracker.validation import TransactionFormValidator

Translate = Callable[[str], str]


# Page configuration
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

THEME_CSS = {
    "light": """
<style>
    .stApp {
        background-color: #f8fafc;
        color: #0f172a;
    }
    [data-testid="stSidebar"] {
        background-color: #ffffff;
    }
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
</style>
""",
    "dark": """
<style>
    .stApp {
        background-color: #0f172a;
        color: #e2e8f0;
    }
    [data-testid="stSidebar"] {
        background-color: #1e293b;
    }
    .stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label,
    [data-testid="stMetricValue"], [data-testid="stMetricLabel"] {
        color: #e2e8f0;
    }
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
</style>
""",
}

TYPE_LABEL_KEYS = {
    TransactionType.INCOME: "income",
    TransactionType.EXPENSE: "expense",
    TransactionType.LIABILITY: "loan",
}

PAGE_ICONS = {
    "dashboard": "📊",
    "history": "📜",
    "addNew": "➕",
    "settings": "⚙️",
}


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components(use_storage=True)


def get_preferences() -> PreferencesStore:
    if "preferences" not in st.session_state:
        st.session_state.preferences = PreferencesStore.load(
            get_settings().app.preferences_path
        )
    return st.session_state.preferences


def format_amount(amount, symbol: str) -> str:
    return f"{symbol}{amount:,.2f}"


def main():
    """Main application entry point."""
    auth_service, store, _ = get_components()
    preferences = get_preferences()
    t = translator(preferences.preferences.language)

    st.markdown(THEME_CSS[preferences.preferences.theme], unsafe_allow_html=True)

    if "session" not in st.session_state:
        st.session_state.session = None

    if st.session_state.session is None:
        render_login_page(auth_service, store, t)
        return

    session: FinanceSession = st.session_state.session

    # Sidebar navigation
    st.sidebar.title(f"💰 {t('appTitle')}")
    st.sidebar.markdown(f"{t('signedInAs')} **{session.user.username}**")
    if session.user.avatar_url:
        st.sidebar.image(session.user.avatar_url, width=64)
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        t("dashboard"),
        list(PAGE_ICONS),
        format_func=lambda key: f"{PAGE_ICONS[key]} {t(key)}",
        index=0,
        label_visibility="collapsed",
    )

    st.sidebar.markdown("---")
    if st.sidebar.button(f"🚪 {t('logout')}"):
        st.session_state.session = None
        st.rerun()

    if page == "dashboard":
        render_dashboard_page(session, preferences, t)
    elif page == "history":
        render_history_page(session, preferences, t)
    elif page == "addNew":
        render_add_page(session, t)
    elif page == "settings":
        render_settings_page(session, preferences, auth_service, t)


def render_login_page(auth_service, store, t: Translate):
    """Sign in or create an account."""
    st.title(f"👋 {t('loginTitle')}")
    st.markdown(t("loginSubtitle"))

    mode = st.radio(
        t("loginBtn"),
        ["loginBtn", "registerBtn"],
        format_func=t,
        horizontal=True,
        label_visibility="collapsed",
    )

    with st.form("auth_form"):
        username = st.text_input(t("username"))
        password = st.text_input(t("password"), type="password")
        submitted = st.form_submit_button(t(mode), type="primary")

    if submitted:
        if mode == "loginBtn":
            result = run_async(auth_service.login(username, password))
        else:
            result = run_async(auth_service.register(username, password))

        if not result.success:
            st.error(result.message or "Something went wrong")
            return

        session = FinanceSession(user=result.user, store=store)
        with st.spinner(t("loadingTransactions")):
            run_async(session.refresh())
        st.session_state.session = session
        st.rerun()


def render_dashboard_page(session: FinanceSession, preferences: PreferencesStore, t: Translate):
    """Balance, totals, expense breakdown and the AI advisor."""
    st.title(f"📊 {t('dashboard')}")
    symbol = preferences.preferences.currency_symbol
    summary = session.summary

    col1, col2, col3 = st.columns(3)
    col1.metric(t("currentBalance"), format_amount(summary.balance, symbol))
    col2.metric(t("totalIncome"), format_amount(summary.total_income, symbol))
    col3.metric(t("totalExpense"), format_amount(summary.total_expense, symbol))

    col4, col5 = st.columns(2)
    col4.metric(t("totalDebt"), format_amount(summary.total_debt, symbol))
    col5.metric(t("totalReceivable"), format_amount(summary.total_receivable, symbol))

    st.markdown("---")
    st.subheader(t("expenseCategory"))
    breakdown = session.expense_breakdown
    if breakdown:
        st.bar_chart(
            {
                t("category"): list(breakdown.keys()),
                t("amount"): [float(value) for value in breakdown.values()],
            },
            x=t("category"),
            y=t("amount"),
        )
    else:
        st.info(t("noExpenses"))

    st.markdown("---")
    st.subheader(f"🤖 {t('aiAdvisor')}")
    st.markdown(t("aiDesc"))
    if st.button(t("analyze"), type="primary"):
        with st.spinner(t("analyzing")):
            st.markdown(run_async(session.advice()))


def render_history_page(session: FinanceSession, preferences: PreferencesStore, t: Translate):
    """All transactions, newest first, with edit and delete."""
    st.title(f"📜 {t('history')}")
    symbol = preferences.preferences.currency_symbol

    if st.button(f"🔄 {t('reload')}"):
        run_async(session.refresh())

    transactions = session.transactions
    if not transactions:
        st.info(t("noTransactions"))
        return

    for transaction in transactions:
        sign = "+" if cash_direction(transaction) > 0 else "-"
        col1, col2, col3, col4, col5 = st.columns([2, 3, 4, 2, 1])
        col1.write(transaction.date.strftime("%d %b %Y"))
        col2.write(f"{t(TYPE_LABEL_KEYS[transaction.type])} · {transaction.category}")
        details = transaction.note or ""
        if transaction.person:
            details = f"{details} ({t('with')} {transaction.person})".strip()
        if transaction.payment_method:
            details = f"{details} [{transaction.payment_method.value}]".strip()
        col3.write(details)
        col4.write(f"{sign}{format_amount(transaction.amount, symbol)}")
        if col5.button("🗑️", key=f"delete_{transaction.id}"):
            run_async(session.remove(transaction.id))
            st.rerun()

    st.markdown("---")
    st.subheader(f"✏️ {t('editTransaction')}")
    selected = st.selectbox(
        t("transaction"),
        options=[tx.id for tx in transactions],
        format_func=lambda tx_id: _describe(session.find(tx_id), symbol),
    )
    if selected:
        render_transaction_form(session, t, session.find(selected))


def _describe(transaction, symbol: str) -> str:
    if transaction is None:
        return ""
    return (
        f"{transaction.date.isoformat()} · {transaction.category} · "
        f"{format_amount(transaction.amount, symbol)}"
    )


def render_add_page(session: FinanceSession, t: Translate):
    st.title(f"➕ {t('addNew')}")
    render_transaction_form(session, t, None)


def render_transaction_form(session: FinanceSession, t: Translate, existing: Transaction = None):
    """Shared add/edit form. ``existing`` switches it to edit mode."""
    validator = TransactionFormValidator()
    key = existing.id if existing else "new"

    types = list(TransactionType)
    transaction_type = st.radio(
        t("type"),
        options=types,
        index=types.index(existing.type) if existing else types.index(TransactionType.EXPENSE),
        format_func=lambda tx_type: t(TYPE_LABEL_KEYS[tx_type]),
        horizontal=True,
        key=f"type_{key}",
    )

    categories = categories_for(transaction_type)
    if existing and existing.type == transaction_type:
        category_index = categories.index(existing.category)
    else:
        category_index = categories.index(DEFAULT_CATEGORY[transaction_type])

    with st.form(f"transaction_form_{key}"):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.text_input(
                f"{t('amount')} *",
                value=str(existing.amount) if existing else "",
            )
            tx_date = st.date_input(
                f"{t('date')} *",
                value=existing.date if existing else date.today(),
            )
        with col2:
            category = st.selectbox(f"{t('category')} *", options=categories, index=category_index)
            payment_method = None
            person = None
            if transaction_type == TransactionType.EXPENSE:
                methods = [m.value for m in PaymentMethod]
                current = existing.payment_method.value if existing and existing.payment_method else methods[0]
                payment_method = st.selectbox(t("paymentMethod"), options=methods, index=methods.index(current))
            elif transaction_type == TransactionType.LIABILITY:
                person = st.text_input(
                    f"{t('person')} ({t('optional')})",
                    value=(existing.person or "") if existing else "",
                    help=t("personHelp"),
                )

        note = st.text_area(
            f"{t('note')} ({t('optional')})",
            value=(existing.note or "") if existing else "",
        )
        submitted = st.form_submit_button(
            t("updateTransaction") if existing else t("saveTransaction"),
            type="primary",
        )

    if not submitted:
        return

    form = {
        "type": transaction_type,
        "amount": amount,
        "date": tx_date,
        "category": category,
        "payment_method": payment_method,
        "person": person,
        "note": note,
    }

    if existing:
        result = validator.validate_update(form)
    else:
        result = validator.validate(form)

    message = validator.get_user_friendly_summary(result)
    if not result.is_valid:
        st.error(message)
        return
    if message:
        st.warning(message)

    if existing:
        run_async(session.edit(existing.id, result.update))
        st.success(f"✅ {t('updated')}")
    else:
        created = run_async(session.add(result.draft))
        if created is None:
            st.error(t("saveFailed"))
            return
        st.success(f"✅ {t('saved')}")


def render_settings_page(
    session: FinanceSession,
    preferences: PreferencesStore,
    auth_service,
    t: Translate,
):
    """Preferences, profile picture and connection status."""
    st.title(f"⚙️ {t('settings')}")

    st.markdown(f"### {t('preferences')}")
    current = preferences.preferences

    currencies = ["BDT", "USD", "INR"]
    currency = st.selectbox(t("currency"), currencies, index=currencies.index(current.currency))
    if currency != current.currency:
        preferences.set_currency(currency)
        st.rerun()

    languages = ["bn", "en"]
    language = st.selectbox(
        t("language"),
        languages,
        index=languages.index(current.language),
        format_func=lambda code: {"bn": "বাংলা", "en": "English"}[code],
    )
    if language != current.language:
        preferences.set_language(language)
        st.rerun()

    if st.button(t("darkTheme") if current.theme == "light" else t("lightTheme")):
        preferences.toggle_theme()
        st.rerun()

    st.markdown("---")
    st.markdown(f"### {t('profile')}")
    avatar_url = st.text_input(t("avatarUrl"), value=session.user.avatar_url or "")
    if st.button(t("saveProfile")):
        if run_async(auth_service.update_avatar(session.user.username, avatar_url)):
            session.user = session.user.model_copy(update={"avatar_url": avatar_url or None})
            st.success(f"✅ {t('profileUpdated')}")
        else:
            st.error(t("profileFailed"))

    st.markdown("---")
    st.markdown(f"### {t('connectionStatus')}")

    status = validate_all_settings()
    services = [
        ("Google Sheets", "google_sheets"),
        ("Gemini", "gemini"),
    ]
    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - {t('configured')}")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown(t("configHelp"))


if __name__ == "__main__":
    main()
