import altair as alt
import pandas as pd
import streamlit as st

from eco_optimizer.optimizer import optimize_appliances
from eco_optimizer.results_analysis import export_summary, schedule_frame
from eco_optimizer.storage import ResultStore
from eco_scheduler import config
from eco_scheduler.models import Preferences, parse_appliance
from eco_scheduler.prepare_data import prepare_bands

BAND_COLOURS = {"GREEN": "#2e9e5b", "BLUE": "#3b7dd8", "ORANGE": "#f39c12", "RED": "#d64541"}
EXPORT_FORMATS = [
    ("csv", "Download CSV", "csv", "text/csv"),
    ("text", "Download Text", "txt", "text/plain"),
    ("json", "Download JSON", "json", "application/json"),
]

DEFAULT_APPLIANCES = pd.DataFrame([
    {"id": "ev", "name": "EV Charger", "powerMin": 3000, "powerMax": 7000, "defaultRuntime": 6.0,
     "selected": True, "runtime": None, "startTime": 18, "flexHours": 6},
    {"id": "dishwasher", "name": "Dishwasher", "powerMin": 1200, "powerMax": 1500, "defaultRuntime": 2.0,
     "selected": True, "runtime": None, "startTime": 20, "flexHours": 6},
    {"id": "washer", "name": "Washing Machine", "powerMin": 500, "powerMax": 2000, "defaultRuntime": 1.5,
     "selected": False, "runtime": None, "startTime": 19, "flexHours": 6},
    {"id": "dryer", "name": "Clothes Dryer", "powerMin": 1800, "powerMax": 5000, "defaultRuntime": 1.0,
     "selected": False, "runtime": None, "startTime": 19, "flexHours": 6},
    {"id": "water_heater", "name": "Water Heater", "powerMin": 3000, "powerMax": 4500, "defaultRuntime": 3.0,
     "selected": False, "runtime": None, "startTime": 17, "flexHours": 6},
])


def editor_records(df):
    """Editor rows as raw records, with blank optional cells dropped."""
    records = []
    for record in df.to_dict(orient="records"):
        records.append({k: v.item() if hasattr(v, "item") else v
                        for k, v in record.items() if not (v is None or pd.isna(v))})
    return records


@st.cache_resource
def get_store():
    return ResultStore()


st.set_page_config(
    page_title="EcoShift",
    page_icon="🌱",
    layout="wide"
)
st.title("EcoShift Appliance Scheduler 🌱")

tab_bands, tab_input, tab_results = st.tabs(["Eco Bands 🕒", "Appliances 📝", "Results 📊"])

with tab_bands:
    source = st.selectbox("Table source", ["fallback", "csv"], index=0)
    csv_path = config.CSV_PATH
    if source == "csv":
        csv_path = st.text_input("CSV path", value=config.CSV_PATH)
    bands = prepare_bands(source=source, csv_path=csv_path)

    band_chart = (
        alt.Chart(bands.reset_index())
        .mark_bar()
        .encode(
            x=alt.X("hour:O", title="Hour"),
            y=alt.Y("price:Q", title="Price ($/MWh)"),
            color=alt.Color("band:N", scale=alt.Scale(domain=list(BAND_COLOURS), range=list(BAND_COLOURS.values()))),
            tooltip=["hour", "band", "price", "credit", "points", "description"],
        )
        .properties(title="24-hour eco bands", height=250)
    )
    st.altair_chart(band_chart, use_container_width=True)
    st.dataframe(bands, use_container_width=True)

with tab_input:
    col_appliances, col_prefs = st.columns([3, 1])

    with col_appliances:
        st.subheader("Appliances")
        appliances_df = st.data_editor(DEFAULT_APPLIANCES, num_rows="dynamic", use_container_width=True)

    with col_prefs:
        st.subheader("Preferences")
        preferences = Preferences(
            prioritize_savings=st.checkbox("Prioritize savings", value=True),
            prioritize_eco_points=st.checkbox("Prioritize eco points", value=False),
            avoid_peak_hours=st.checkbox("Avoid peak hours", value=True),
        )

    run_button = st.button("Optimize Schedule")

    if run_button:
        try:
            appliances = [parse_appliance(record) for record in editor_records(appliances_df)]
        except ValueError as exc:
            st.error(f"Invalid appliance: {exc}")
        else:
            summary = optimize_appliances(appliances, bands, preferences)
            st.session_state["result_id"] = get_store().store(summary)
            st.success("✅ Schedule optimized! See results tab.")

with tab_results:
    summary = get_store().get(st.session_state.get("result_id"))
    if summary is not None:
        st.header("Results")
        # --- KPIs ---
        kpi1, kpi2, kpi3, kpi4 = st.columns(4)
        kpi1.metric(label="💰 Savings", value=f"${summary.total_savings:.2f}")
        kpi2.metric(label="🍃 EcoPoints", value=f"+{summary.total_eco_points}")
        kpi3.metric(label="⚡ Energy Shifted", value=f"{summary.total_energy_shifted:.1f} kWh")
        kpi4.metric(label="🌱 Carbon Reduction", value=f"{summary.carbon_reduction:.1f} kg CO₂")

        results = schedule_frame(summary)
        for s in summary.schedules:
            if not s.feasible:
                st.warning(f"No start time lets {s.appliance} finish today, kept its original time.")

        # --- Plot original vs recommended start ---
        chart_data = results.melt(
            id_vars=["appliance"],
            value_vars=["original_time", "recommended_time"],
            var_name="Schedule",
            value_name="Hour"
        )
        start_chart = (
            alt.Chart(chart_data)
            .mark_point(filled=True, size=120)
            .encode(
                x=alt.X("Hour:Q", scale=alt.Scale(domain=[0, 23]), title="Start hour"),
                y=alt.Y("appliance:N", title=None),
                color=alt.Color("Schedule:N"),
            )
            .properties(title="Original vs recommended start", height=200)
        )
        st.altair_chart(start_chart, use_container_width=True)
        st.dataframe(results, use_container_width=True)

        # --- Download buttons ---
        for col, (fmt, label, suffix, mime) in zip(st.columns(3), EXPORT_FORMATS):
            col.download_button(label, export_summary(summary, fmt).encode("utf-8"),
                                file_name=f"ecoshift-plan.{suffix}", mime=mime)
    else:
        st.write("No results to display!")
