import streamlit as st
from loanfinder.config import load_settings
from loanfinder.formatting import fmt_percent
from loanfinder.log_setup import setup_logging
from loanfinder.storage import clear_loan_data, get_loan_data, open_store
from loanfinder.tips import personalized_tips, score_breakdown

st.set_page_config(page_title="Improve Your Score • LoanFinder NZ", layout="wide")

@st.cache_resource
def get_settings():
    settings = load_settings()
    setup_logging(settings.log_level)
    return settings

settings = get_settings()
store = open_store(settings, st.session_state)
saved = get_loan_data(store)

top_l, top_r = st.columns([4, 1])
with top_l:
    st.page_link("streamlit_app.py", label="← Back to Calculator")
    st.title("Improve Your Score")
    if saved:
        st.caption(f"Current score: **{saved.score}%** - Here's how to improve it")
with top_r:
    st.page_link("pages/compare_lenders.py", label="View Lenders")

if not saved:
    st.info("**Get Personalised Tips**: complete our loan eligibility calculator "
            "to receive personalised improvement recommendations.")
else:
    st.subheader("Your Score Breakdown")
    breakdown = score_breakdown(saved)
    cols = st.columns(len(breakdown))
    for col, (factor, pct) in zip(cols, breakdown.items()):
        with col:
            st.metric(f"{factor} Score", fmt_percent(pct))

for tip in personalized_tips(saved):
    with st.container(border=True):
        left, right = st.columns([4, 1])
        with left:
            st.markdown(f"### {tip.title}")
            st.write(tip.description)
        with right:
            st.write(f"**{tip.impact.value} Impact**")
            st.caption(tip.timeframe)
        st.write("**Action Steps:**")
        for action in tip.actions:
            st.write(f"- {action}")

st.divider()
st.subheader("Ready to Apply?")
st.write("Once you've improved your score, check out lenders that match your profile")
c1, c2 = st.columns(2)
with c1:
    if st.button("Retake Calculator"):
        clear_loan_data(store)
        for k in ("result", "age", "income", "debts", "credit", "residency"):
            st.session_state.pop(k, None)
        st.switch_page("streamlit_app.py")
with c2:
    st.page_link("pages/compare_lenders.py", label="Compare Lenders")

st.subheader("Helpful Resources")
r1, r2 = st.columns(2)
with r1:
    st.link_button("Check Your Credit Score (Free)", "https://www.credit-help.co.nz/")
    st.link_button("Government Debt Help", "https://www.govt.nz/browse/consumer-rights-and-complaints/debt-and-money-problems/")
with r2:
    st.link_button("Financial Education (Sorted.org.nz)", "https://sorted.org.nz/")
    st.link_button("Money Tips & Advice", "https://www.moneyhub.co.nz/")
