import streamlit as st
from loanfinder.config import load_settings
from loanfinder.log_setup import setup_logging, log_calculation
from loanfinder.scoring import BorrowerProfile, CreditRating, ResidencyStatus, Tier, score_profile
from loanfinder.storage import open_store, store_loan_data, clear_loan_data

st.set_page_config(page_title="Loan Eligibility Calculator NZ", layout="wide")

@st.cache_resource
def get_settings():
    settings = load_settings()
    setup_logging(settings.log_level)
    return settings

settings = get_settings()
store = open_store(settings, st.session_state)

TIER_COLORS = {Tier.HIGH: "#22C55E", Tier.MODERATE: "#F59E0B", Tier.LOW: "#EF4444"}

CREDIT_OPTIONS = {
    "Excellent (Never missed payments)": CreditRating.EXCELLENT,
    "Good (1-2 late payments in last 2 years)": CreditRating.GOOD,
    "Average (3-5 late payments in last 2 years)": CreditRating.AVERAGE,
    "Poor (6+ late payments or defaults)": CreditRating.POOR,
}
RESIDENCY_OPTIONS = {
    "NZ Citizen": ResidencyStatus.CITIZEN,
    "Permanent Resident": ResidencyStatus.RESIDENT,
    "Work Visa": ResidencyStatus.WORK_VISA,
    "Other": ResidencyStatus.OTHER,
}
DEFAULTS = {"age": 30, "income": 50000, "debts": 1000, "credit": None, "residency": None}

def reset_form():
    for k, v in DEFAULTS.items():
        st.session_state[k] = v
    st.session_state.pop("result", None)
    clear_loan_data(store)

def hide_result():
    # Any input change invalidates the result on screen
    st.session_state.pop("result", None)

for k, v in DEFAULTS.items():
    st.session_state.setdefault(k, v)

st.title("Loan Eligibility Check")
st.caption("Smart Loan Eligibility Assessment • Answer simple questions to get your personalised eligibility score")

col1, col2 = st.columns(2)
with col1:
    st.slider("Age", 18, 70, key="age", on_change=hide_result)
    st.slider("Annual Income (NZD)", 0, 200000, step=5000, key="income", format="$%d", on_change=hide_result)
    st.slider("Monthly Debt Payments (NZD)", 0, 5000, step=50, key="debts", format="$%d", on_change=hide_result)
with col2:
    st.selectbox("Credit History", list(CREDIT_OPTIONS), index=None,
                 placeholder="Select credit history", key="credit", on_change=hide_result)
    st.selectbox("NZ Residency Status", list(RESIDENCY_OPTIONS), index=None,
                 placeholder="Select residency status", key="residency", on_change=hide_result)

b1, b2, _ = st.columns([1, 1, 4])
with b1:
    calculate = st.button("Calculate My Score", type="primary",
                          disabled=not (st.session_state["credit"] and st.session_state["residency"]))
with b2:
    st.button("Reset", on_click=reset_form)

if calculate:
    profile = BorrowerProfile(
        age=st.session_state["age"],
        income=st.session_state["income"],
        monthly_debt=st.session_state["debts"],
        credit_rating=CREDIT_OPTIONS[st.session_state["credit"]],
        residency_status=RESIDENCY_OPTIONS[st.session_state["residency"]],
    )
    result = score_profile(profile)
    st.session_state["result"] = result
    store_loan_data(store, profile, result.score)
    log_calculation(result)

result = st.session_state.get("result")
if result is not None:
    st.divider()
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Eligibility Score", f"{result.score}/100")
        st.markdown(f"<span style='color:{TIER_COLORS[result.tier]}'><b>{result.tier.value} eligibility</b></span>",
                    unsafe_allow_html=True)
    with c2:
        st.metric("Estimated Loan Range", f"Up to {result.loan_range}")
    with c3:
        st.metric("Readiness", result.tier.value, help=result.message)
        st.write(result.message)

    if result.improvements:
        st.write("**Ways to improve**")
        for imp in result.improvements:
            st.write(f"- **{imp.category}** ({imp.impact.value} impact): {imp.suggestion}")

    l1, l2 = st.columns(2)
    with l1:
        st.page_link("pages/compare_lenders.py", label="Compare Lenders")
    with l2:
        st.page_link("pages/improve_score.py", label="Improve Score")

st.divider()
st.caption(settings.disclaimer)
