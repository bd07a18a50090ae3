import os
import uuid

import httpx
import streamlit as st

from portfolio_journal.formatting import format_currency, format_error_detail, format_percent, format_pl

BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")


def get_server_info() -> dict:
    try:
        response = httpx.get(f"{BACKEND_URL}/health", timeout=2.0)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError:
        return {"data_source": "unknown"}


def call_backend(method: str, path: str, **kwargs) -> dict | None:
    try:
        response = httpx.request(method, f"{BACKEND_URL}{path}", timeout=20.0, **kwargs)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        st.toast(f"Request failed: {format_error_detail(exc.response)}")
    except httpx.HTTPError as exc:
        st.toast(f"Request failed: {exc}")
    return None


st.set_page_config(page_title="Investment Portfolio", page_icon=":chart_with_upwards_trend:")
st.title("Investment Portfolio")

if "session_id" not in st.session_state:
    st.session_state.session_id = str(uuid.uuid4())
if "unlocked" not in st.session_state:
    st.session_state.unlocked = False

with st.sidebar:
    server_info = get_server_info()
    st.caption(f"Data source: **{server_info.get('data_source', 'unknown')}**")
    if server_info.get("market_data_configured") is False:
        st.warning("Market data API key is missing; quotes will be skipped.")

_, header_right = st.columns([5, 1])
with header_right:
    refresh_clicked = st.button("Refresh")

with st.spinner("Loading portfolio..."):
    if refresh_clicked:
        state = call_backend("POST", "/portfolio/refresh")
    else:
        state = call_backend("GET", "/portfolio")

if state is None:
    st.stop()

if state["status"] == "idle":
    st.info("Portfolio is loading. Press Refresh in a moment.")
elif state["status"] == "error":
    st.error(state.get("error") or "Failed to load portfolio data.")
else:
    summary = state["summary"]
    value_col, pl_col = st.columns(2)
    value_col.metric("Total Value", format_currency(summary["total_market_value"]))
    pl_col.metric("Daily P/L", format_pl(summary["total_daily_pl"]))

    if not state["holdings"] and not state.get("loading"):
        st.info("No holdings found.")
    else:
        for holding in state["page"]:
            with st.container(border=True):
                left, right = st.columns(2)
                left.markdown(f"**{holding['symbol']}**  \n{holding['shares']:g} Shares · {holding['industry']}")
                right.markdown(
                    f"{format_currency(holding['market_value'])}  \n"
                    f"{format_currency(holding['price'])} ({format_percent(holding['percent_change'])})"
                )

        prev_col, page_col, next_col = st.columns([1, 3, 1])
        if prev_col.button("Previous", disabled=state["current_page"] == 0):
            call_backend("POST", "/portfolio/page", json={"action": "previous"})
            st.rerun()
        selected = page_col.selectbox(
            "Page",
            options=list(range(state["page_count"])),
            index=state["current_page"],
            format_func=lambda i: f"{i + 1} / {state['page_count']}",
        )
        if selected != state["current_page"]:
            call_backend("POST", "/portfolio/page", json={"action": "jump", "index": selected})
            st.rerun()
        if next_col.button("Next", disabled=state["current_page"] >= state["page_count"] - 1):
            call_backend("POST", "/portfolio/page", json={"action": "next"})
            st.rerun()

    if state["allocation"]:
        st.subheader("Allocation by industry")
        st.bar_chart({b["industry"]: b["percentage"] for b in state["allocation"]})
        st.table(
            [
                {"Industry": b["industry"], "Share": f"{b['percentage']:.1f}%", "Value": format_currency(b["value"])}
                for b in state["allocation"]
            ]
        )

with st.expander("Manage holdings"):
    if not st.session_state.unlocked:
        password = st.text_input("Password", type="password")
        if st.button("Unlock"):
            result = call_backend(
                "POST",
                "/session/unlock",
                json={"session_id": st.session_state.session_id, "password": password},
            )
            if result and result.get("authenticated"):
                st.session_state.unlocked = True
                st.rerun()
    else:
        with st.form("add_holding"):
            symbol = st.text_input("Symbol")
            shares = st.number_input("Shares", min_value=0.0, step=1.0)
            if st.form_submit_button("Add"):
                if call_backend(
                    "POST",
                    "/holdings",
                    json={"session_id": st.session_state.session_id, "symbol": symbol, "shares": shares},
                ):
                    st.rerun()

        holdings = state.get("holdings", [])
        if holdings:
            choice = st.selectbox(
                "Holding",
                options=holdings,
                format_func=lambda h: f"{h['symbol']} ({h['shares']:g})",
            )
            new_shares = st.number_input("New share count", min_value=0.0, value=float(choice["shares"]))
            update_col, remove_col = st.columns(2)
            if update_col.button("Update shares"):
                if call_backend(
                    "PATCH",
                    f"/holdings/{choice['id']}",
                    json={"session_id": st.session_state.session_id, "shares": new_shares},
                ):
                    st.rerun()
            if remove_col.button("Remove"):
                if call_backend(
                    "DELETE",
                    f"/holdings/{choice['id']}",
                    params={"session_id": st.session_state.session_id},
                ):
                    st.rerun()
