"""
Ürün Kataloğu Yönetim Dashboard'u
Çalıştır: streamlit run catalog_dashboard/dashboard.py
"""
from __future__ import annotations

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from catalog_dashboard.advisor.advice import build_advice_summary, get_advice
from catalog_dashboard.auth.identity import load_products_for, login, verify_token
from catalog_dashboard.config.settings import CURRENCY_SYMBOL, PRODUCTS_FILE
from catalog_dashboard.engine.aggregator import compute_dashboard_stats
from catalog_dashboard.errors import AuthenticationError
from catalog_dashboard.store.json_store import JsonProductStore

# ── Sayfa Ayarları ────────────────────────────────────────
st.set_page_config(
    page_title="Katalog Yönetim Paneli",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_store() -> JsonProductStore:
    return JsonProductStore(PRODUCTS_FILE)


@st.cache_data(ttl=600, show_spinner=False)
def load_advice(summary: dict, refresh: int):
    """Danışman çağrısı; `refresh` değişince yeniden istenir."""
    return get_advice(summary)


def render_login():
    st.title("Giriş")
    with st.form("login"):
        email = st.text_input("E-posta")
        password = st.text_input("Şifre", type="password")
        submitted = st.form_submit_button("Giriş Yap")
    if submitted:
        try:
            st.session_state["token"] = login(email, password)
            st.rerun()
        except AuthenticationError as e:
            st.error(str(e))


def main():
    token = st.session_state.get("token")
    user = verify_token(token)
    if user is None:
        render_login()
        return

    products = load_products_for(token, get_store())
    stats = compute_dashboard_stats(products)

    # ── Sidebar ───────────────────────────────────────────
    with st.sidebar:
        st.title("📊 Katalog Paneli")
        st.caption(user.email)
        st.divider()
        trend_range = st.radio("Satış Trendi", ["7 gün", "30 gün"], index=0)
        st.divider()
        st.caption(f"Toplam {stats.total_products} ürün")
        if st.button("Çıkış"):
            st.session_state.pop("token", None)
            st.rerun()

    render_main_dashboard(stats, trend_range)
    render_advisor(stats)


# ══════════════════════════════════════════════════════════
#  ANA PANEL
# ══════════════════════════════════════════════════════════
def render_main_dashboard(stats, trend_range):
    cur = CURRENCY_SYMBOL
    st.title("Ana Panel")

    # ── KPI Kartları ──────────────────────────────────────
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Ürün Sayısı", stats.total_products)
    col2.metric("Toplam Stok", stats.total_inventory, delta=f"{stats.low_stock_products} düşük stok",
                delta_color="inverse" if stats.low_stock_products else "off")
    col3.metric("Stok Değeri", f"{cur}{stats.total_value:,.0f}")
    col4.metric("Sell-Through", f"{stats.sell_through:.1f}%")

    col5, col6 = st.columns(2)
    col5.metric("Satılan Adet", stats.total_sold)
    col6.metric("Toplam Gelir", f"{cur}{stats.total_intake:,.0f}")

    st.divider()

    # ── Grafikler ─────────────────────────────────────────
    col_left, col_right = st.columns([2, 1])

    with col_left:
        st.subheader("Satış Trendi")
        points = stats.sales_trend_7 if trend_range == "7 gün" else stats.sales_trend_30
        if not any(p.units or p.revenue for p in points):
            st.info("Henüz son dönemde satış kaydı yok.")
        else:
            fig = go.Figure()
            fig.add_trace(go.Scatter(
                x=[p.date for p in points],
                y=[p.revenue for p in points],
                mode="lines+markers",
                name=f"Gelir ({cur})",
                fill="tozeroy",
                line=dict(color="#4CAF50", width=2),
            ))
            fig.add_trace(go.Bar(
                x=[p.date for p in points],
                y=[p.units for p in points],
                name="Adet",
                yaxis="y2",
                marker_color="#2E86AB",
                opacity=0.5,
            ))
            fig.update_layout(
                height=350,
                margin=dict(l=20, r=20, t=20, b=20),
                hovermode="x unified",
                yaxis2=dict(overlaying="y", side="right", showgrid=False),
            )
            st.plotly_chart(fig, use_container_width=True)

    with col_right:
        st.subheader("Kategori Bazında Değer")
        if stats.category_stats:
            fig_pie = px.pie(
                names=[c.category for c in stats.category_stats],
                values=[c.value for c in stats.category_stats],
                hole=0.4,
                color_discrete_sequence=px.colors.qualitative.Set2,
            )
            fig_pie.update_layout(height=350, margin=dict(l=20, r=20, t=20, b=20))
            st.plotly_chart(fig_pie, use_container_width=True)

    # ── Aylık Satış ───────────────────────────────────────
    st.subheader("Aylık Satış")
    fig_month = px.bar(
        x=[m.month for m in stats.monthly_sales],
        y=[m.sales for m in stats.monthly_sales],
        labels={"x": "Ay", "y": f"Satış ({cur})"},
        color_discrete_sequence=["#F56400"],
    )
    fig_month.update_layout(height=300, margin=dict(l=20, r=20, t=20, b=20))
    st.plotly_chart(fig_month, use_container_width=True)

    # ── Tablolar ──────────────────────────────────────────
    st.divider()
    col_top, col_low = st.columns(2)

    with col_top:
        st.subheader("En Çok Satanlar")
        st.dataframe(
            [{"Ürün": p.name, "Satılan": p.sold, "Stok": p.stock, "Değer": f"{cur}{p.value:,.0f}"}
             for p in stats.top_selling],
            use_container_width=True,
            hide_index=True,
        )

    with col_low:
        st.subheader("Düşük Stok")
        if stats.low_stock_list:
            for p in stats.low_stock_list:
                if p.stock == 0:
                    st.error(f"**STOK BİTTİ:** {p.name}")
                else:
                    st.warning(f"**DÜŞÜK STOK:** {p.name} - Kalan: {p.stock} adet")
        else:
            st.success("Tüm ürünlerin stoku yeterli.")


def render_advisor(stats):
    st.divider()
    st.subheader("AI Danışman")
    if st.button("Yenile"):
        st.session_state["advice_refresh"] = st.session_state.get("advice_refresh", 0) + 1

    advice = load_advice(build_advice_summary(stats), st.session_state.get("advice_refresh", 0))
    st.markdown(advice.text)
    st.caption(f"Kaynak: {advice.provider}")


if __name__ == "__main__":
    main()
