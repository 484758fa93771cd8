import streamlit as st
from loanfinder.config import load_settings
from loanfinder.lenders import eligible_lenders, lenders_frame, load_lenders
from loanfinder.log_setup import setup_logging
from loanfinder.storage import get_loan_data, open_store

st.set_page_config(page_title="Compare NZ Lenders • LoanFinder NZ", layout="wide")

@st.cache_resource
def get_settings():
    settings = load_settings()
    setup_logging(settings.log_level)
    return settings

@st.cache_data
def get_lenders(path):
    return load_lenders(path)

settings = get_settings()
store = open_store(settings, st.session_state)
saved = get_loan_data(store)

st.page_link("streamlit_app.py", label="← Back to Calculator")
st.title("Compare NZ Lenders")
if saved:
    st.caption(f"Based on your eligibility score of **{saved.score}%**")
else:
    st.info("**Complete the Calculator First**: for personalised recommendations, "
            "complete our loan eligibility calculator first.")

lenders = eligible_lenders(get_lenders(settings.lenders_path), saved.score if saved else None)

if not lenders:
    st.subheader("No Matching Lenders")
    st.write("Consider improving your eligibility score or try alternative lenders.")
    st.page_link("pages/improve_score.py", label="Improve Your Score")
else:
    cols = st.columns(3)
    for i, lender in enumerate(lenders):
        with cols[i % 3]:
            with st.container(border=True):
                st.markdown(f"### {lender.name}")
                st.caption(f"{lender.type.value} • {lender.approval}")
                st.write(f"**Loan Range:** {lender.loan_range}")
                st.write(f"**Interest Rate:** {lender.rate_from} - {lender.rate_to}")
                st.write(f"**Min Score:** {lender.min_score_needed}%")
                st.write(f"**Eligibility:** {lender.eligibility_notes}")
                st.link_button("Apply Now", lender.url)

    with st.expander("Table view"):
        st.dataframe(
            lenders_frame(lenders),
            use_container_width=True,
            hide_index=True,
            column_config={"Apply": st.column_config.LinkColumn("Apply")},
        )

st.divider()
c1, c2 = st.columns(2)
with c1:
    st.page_link("streamlit_app.py", label="← Back to Calculator")
with c2:
    st.page_link("pages/improve_score.py", label="Improve Your Score →")

st.subheader("Important Disclaimer")
st.caption(
    "These are indicative rates and loan amounts. Actual offers may vary based on your full financial assessment. "
    "Always read the terms and conditions before applying. Interest rates are subject to change. "
    "This comparison is for educational purposes and does not constitute financial advice."
)
