"""Teacher data cache debug page."""

import asyncio
import sys
from pathlib import Path

# Add project root to path (for streamlit which runs this file directly)
_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(_root))

import plotly.graph_objects as go  # noqa: E402
import polars as pl  # noqa: E402
import streamlit as st  # noqa: E402
from loguru import logger  # noqa: E402

from app.container import build_container  # noqa: E402
from app.models import DomainKey, Identity, Role  # noqa: E402
from app.repositories import DAY  # noqa: E402
from web.api import cache  # noqa: E402

st.set_page_config(page_title="Teacher Data Cache", page_icon="🗂️", layout="wide")


async def _collect(token: str | None, action: str) -> dict:
    """Run one action against a fresh session and collect diagnostics."""
    async with build_container(token=token) as c:
        if action == "clear":
            await c.service.clear_all()
        elif token and action in ("load", "refresh"):
            teacher = Identity(is_authenticated=True, role=Role.TEACHER)
            if action == "refresh":
                c.sign_in(token, teacher, autoload=False)
                await c.orchestrator.refresh_all()
            else:
                c.sign_in(token, teacher)
                await c.tasks.drain()

        status = await cache.get_cache_status(c.orchestrator)
        snapshot = await cache.get_storage_snapshot(c.orchestrator)
        states = [cache.get_domain_state(c.orchestrator, k.value) for k in c.orchestrator.domains]

    return {
        "status": [i.model_dump() for i in status.items],
        "snapshot": snapshot.model_dump(),
        "states": [s.model_dump() for s in states],
    }


def collect(token: str | None, action: str) -> dict:
    logger.info("Debug page action: {}", action)
    return asyncio.run(_collect(token, action))


def ttl_chart(status: list[dict]) -> go.Figure:
    days = [(i["remaining_seconds"] or 0) / DAY for i in status]
    return go.Figure(
        go.Bar(
            x=[i["domain"] for i in status],
            y=days,
            marker_color=["#22C55E" if i["valid"] else "#DC2626" for i in status],
            text=[f"{d:.1f}d" for d in days],
            textposition="outside",
        )
    ).update_layout(title="Remaining TTL (days)", margin=dict(t=40, b=40, l=40, r=20), height=350)


def main():
    st.title("🗂️ Teacher Data Cache")

    with st.sidebar:
        token = st.text_input("API token", type="password") or None
        action = "inspect"
        if st.button("Load (cache first)"):
            action = "load"
        if st.button("Refresh all"):
            action = "refresh"
        if st.button("Clear cached data"):
            action = "clear"

    try:
        data = collect(token, action)
    except Exception as e:
        logger.exception("Debug page failed")
        st.error(f"Could not read cache: {e}")
        return

    snapshot = data["snapshot"]
    cols = st.columns(2)
    cols[0].metric("Cached keys", len(snapshot["keys"]))
    cols[1].metric("Size", f"{snapshot['total_size_bytes'] / 1024:.1f} KB")

    st.subheader("Cache validity")
    st.plotly_chart(ttl_chart(data["status"]), width="stretch")
    st.dataframe(pl.DataFrame(data["status"]), width="stretch")

    st.subheader("Domain state")
    st.dataframe(pl.DataFrame(data["states"]), width="stretch")
    for state in data["states"]:
        if state["error"]:
            st.warning(f"{state['domain']}: {state['error']}")

    st.caption(f"Domains: {', '.join(k.value for k in DomainKey)}")


main()
