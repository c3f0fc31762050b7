"""
WooCommerce Mağaza Metrikleri Paneli
Çalıştır: streamlit run store_metrics/dashboard.py
"""
from __future__ import annotations

import logging

import plotly.express as px
import streamlit as st

from store_metrics.admin.actions import (
    MONTH_FIELD,
    NOTICE_FIELD,
    YEAR_FIELD,
    handle_refresh_stats,
    refresh_form,
    selected_period,
)
from store_metrics.admin.fields import (
    RenderState,
    budget_field,
    cost_price_field,
    month_label,
    year_options,
)
from store_metrics.admin.security import NonceSigner, require_capability
from store_metrics.config.settings import (
    CURRENCIES,
    DASHBOARD_CAPABILITIES,
    DEFAULT_CURRENCY,
    LOG_FORMAT,
    LOG_LEVEL,
    STORE_FILE,
)
from store_metrics.engine.statistics import StatisticsService
from store_metrics.exceptions import (
    NonceVerificationError,
    PermissionDeniedError,
    StoreMetricsError,
)
from store_metrics.sources.factory import build_source
from store_metrics.stores.cost_price import CostPriceStore
from store_metrics.stores.json_store import JsonStore
from store_metrics.stores.monthly_budget import BudgetCategory, MonthlyBudgetStore

logging.basicConfig(format=LOG_FORMAT, level=LOG_LEVEL)
logger = logging.getLogger(__name__)

REFRESH_STATE_KEY = "store_metrics_refresh_form"

# ── Sayfa Ayarları ────────────────────────────────────────
st.set_page_config(
    page_title="Mağaza Metrikleri",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)


def _money(value: float) -> str:
    symbol = CURRENCIES.get(DEFAULT_CURRENCY, "$")
    return f"{symbol}{value:,.2f}"


def main():
    # ── Yetki Kontrolü ────────────────────────────────────
    try:
        require_capability(DASHBOARD_CAPABILITIES)
    except PermissionDeniedError as e:
        st.error(e.message)
        st.stop()

    store = JsonStore(STORE_FILE)
    cost_prices = CostPriceStore(store)
    budgets = MonthlyBudgetStore(store)
    signer = NonceSigner()

    try:
        source = build_source()
    except StoreMetricsError as e:
        st.error(f"**{e.message}** {e.details or ''}")
        st.info("Örnek veri için: `python -m store_metrics sample`")
        st.stop()

    service = StatisticsService(source, cost_prices, budgets)
    state = RenderState()

    # ── Dönem Seçimi ──────────────────────────────────────
    selected_year, selected_month = selected_period(st.query_params)
    years = year_options(selected=selected_year)

    with st.sidebar:
        st.title("📊 Mağaza Metrikleri")
        st.divider()

        year = st.selectbox("Yıl", years, index=years.index(selected_year))
        month = st.selectbox(
            "Ay",
            list(range(1, 13)),
            index=min(max(selected_month, 1), 12) - 1,
            format_func=month_label,
        )
        if (year, month) != (selected_year, selected_month):
            st.query_params[YEAR_FIELD] = str(year)
            st.query_params[MONTH_FIELD] = str(month)
            st.query_params.pop(NOTICE_FIELD, None)
            st.rerun()

        st.divider()
        render_settings_form(budgets, year, month)

        st.divider()
        render_cost_price_editor(state, source, cost_prices)

    st.title("Mağaza Metrikleri")
    st.caption(f"Dönem: {month_label(month)} {year}")

    notice = st.query_params.get(NOTICE_FIELD)
    if notice:
        st.success(notice)

    try:
        summary = service.build_summary(year, month)
    except StoreMetricsError as e:
        logger.error("Istatistikler alinamadi: %s", e)
        st.error(str(e))
        st.stop()

    render_top_products(summary)
    st.divider()
    render_statistics(summary)
    render_refresh_form(signer, year, month)


# ══════════════════════════════════════════════════════════
#  AYARLAR (PR BÜTÇESİ / EK GİDERLER)
# ══════════════════════════════════════════════════════════
def render_settings_form(budgets: MonthlyBudgetStore, year: int, month: int):
    st.subheader("ROI Ayarları")

    with st.form("store_metrics_settings"):
        values = {}
        for category in BudgetCategory:
            spec = budget_field(category, year, month, budgets)
            values[category] = (spec["key"], st.number_input(
                spec["label"],
                value=float(spec["value"]),
                min_value=0.0,
                step=0.01,
                help=spec["help"],
                key=spec["id"],
            ))

        if st.form_submit_button("Ayarları Kaydet"):
            for category, (key, amount) in values.items():
                budgets.set_bulk(category, {key: amount})
            st.success("Ayarlar kaydedildi.")


# ══════════════════════════════════════════════════════════
#  MALİYET FİYATI
# ══════════════════════════════════════════════════════════
def render_cost_price_editor(state: RenderState, source, cost_prices: CostPriceStore):
    st.subheader("Maliyet Fiyatı")

    products = source.list_products()
    if not products:
        st.caption("Ürün listesi alınamadı.")
        return

    by_id = {p.product_id: p for p in products}
    product_id = st.selectbox(
        "Ürün",
        list(by_id),
        format_func=lambda pid: f"#{pid} {by_id[pid].name[:40]}",
    )
    product = by_id[product_id]
    spec = cost_price_field(state, product.product_id, cost_prices)
    if spec is None:
        return

    with st.form("store_metrics_cost_price"):
        value = st.number_input(
            spec["label"],
            value=float(spec["value"]),
            min_value=spec["min_value"],
            step=0.01,
            help=spec["help"],
            key=f"{spec['id']}_{product.product_id}",
        )
        if st.form_submit_button("Kaydet"):
            cost_prices.set(product.product_id, value)
            st.success(f"{product.name[:30]}: {_money(value)}")

    margin = product.profit_margin(cost_prices.get(product.product_id))
    if margin is not None:
        st.caption(f"Fiyat: {_money(product.price)} | Kar marjı: {margin:.1f}%")


# ══════════════════════════════════════════════════════════
#  EN ÇOK SATAN 5 ÜRÜN
# ══════════════════════════════════════════════════════════
def render_top_products(summary):
    st.subheader("En Çok Satan 5 Ürün")

    top = summary.top_products
    if not top:
        st.info("Seçili dönemde ürün bulunamadı.")
        return

    col_table, col_chart = st.columns([3, 2])

    with col_table:
        table = []
        for p in top:
            table.append({
                "Görsel": p.image or "",
                "Ürün": p.permalink or "",
                "Ad": p.name,
                "Satış": p.sales_count,
                "Fiyat": _money(p.price),
                "Maliyet Fiyatı*": _money(p.cost_price),
            })
        st.dataframe(
            table,
            use_container_width=True,
            hide_index=True,
            column_config={
                "Görsel": st.column_config.ImageColumn("Görsel", width="small"),
                "Ürün": st.column_config.LinkColumn("Bağlantı", display_text="Aç"),
            },
        )
        st.caption(
            "* Maliyet fiyatı, kenar çubuğundaki 'Maliyet Fiyatı' bölümünden "
            "ürün bazında girilir."
        )

    with col_chart:
        fig = px.bar(
            x=[p.name[:25] for p in top],
            y=[p.sales_count for p in top],
            labels={"x": "Ürün", "y": "Adet"},
            color=[p.sales_count for p in top],
            color_continuous_scale="Greens",
        )
        fig.update_layout(
            height=350,
            margin=dict(l=20, r=20, t=20, b=80),
            xaxis_tickangle=-45,
            coloraxis_showscale=False,
        )
        st.plotly_chart(fig, use_container_width=True)


# ══════════════════════════════════════════════════════════
#  GÜNCEL İSTATİSTİKLER
# ══════════════════════════════════════════════════════════
def render_statistics(summary):
    st.subheader("Güncel İstatistikler")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Toplam Satış", _money(summary.total_sales))
    with col2:
        st.metric("Toplam Sipariş", summary.total_deals)
    with col3:
        st.metric("ROI", summary.roi)

    st.dataframe(
        [
            {"Metrik": "Toplam Satış", "Değer": _money(summary.total_sales)},
            {"Metrik": "Toplam Sipariş", "Değer": str(summary.total_deals)},
            {"Metrik": "Toplam Maliyet", "Değer": _money(summary.total_cost_price)},
            {"Metrik": "PR Bütçesi", "Değer": _money(summary.pr_budget)},
            {"Metrik": "Ek Giderler", "Değer": _money(summary.additional_costs)},
            {"Metrik": "ROI", "Değer": summary.roi},
        ],
        use_container_width=True,
        hide_index=True,
    )


# ══════════════════════════════════════════════════════════
#  YENİLE
# ══════════════════════════════════════════════════════════
def render_refresh_form(signer: NonceSigner, year: int, month: int):
    # Anahtar sayfa ilk çizildiğinde üretilir, gönderimde o anahtar doğrulanır
    hidden = st.session_state.get(REFRESH_STATE_KEY)
    if hidden is None or hidden[YEAR_FIELD] != str(year) or hidden[MONTH_FIELD] != str(month):
        hidden = refresh_form(signer, year, month)
        st.session_state[REFRESH_STATE_KEY] = hidden

    with st.form("store_metrics_refresh"):
        submitted = st.form_submit_button("İstatistikleri Yenile", type="primary")

    if submitted:
        # Anahtar sunucuda üretildi; doğrulama eylemin sözleşmesini korur
        try:
            redirect = handle_refresh_stats(hidden, signer)
        except NonceVerificationError as e:
            st.error(e.message)
            st.stop()
        st.session_state.pop(REFRESH_STATE_KEY, None)
        for key, value in redirect.items():
            st.query_params[key] = value
        st.rerun()


if __name__ == "__main__":
    main()
