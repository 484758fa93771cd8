import streamlit as st

st.set_page_config(page_title="About • LoanFinder NZ", layout="wide")

st.title("📄 About LoanFinder NZ")
st.caption("Indicative personal-loan eligibility for New Zealand borrowers")

st.markdown("""
## What This Site Does
LoanFinder NZ gives you a quick, **indicative** view of how lenders are likely to see a personal-loan application:
- An **eligibility score** out of 100 from five inputs (age, income, monthly debts, credit history, residency)
- A rough **loan range** based on your income and score tier
- A **lender comparison** filtered to the lenders whose minimum score you meet
- **Improvement tips** ordered by what is holding your score back

---

## How the Score Works
| Factor | Max points | Full points when |
|---|---|---|
| Age | 15 | 25 to 55 |
| Income | 25 | $80,000+ a year |
| Debt-to-income | 20 | monthly debts at or under 20% of monthly income |
| Credit history | 25 | Excellent |
| Residency | 15 | NZ citizen or permanent resident |

Scores of **80+** are *High*, **60 to 79** *Moderate*, and below 60 *Low*.

---

## Privacy
- Your inputs stay in your browser session. Nothing is sent to lenders.
- Starting over with **Retake Calculator** or **Reset** clears the saved result.
""")

st.header("FAQ")
with st.expander("Is this a credit check?"):
    st.write("No. The score uses only what you enter. It does not touch your credit file and has no effect on it.")
with st.expander("Why is my loan range lower than a lender's advertised maximum?"):
    st.write("The range is a conservative cap based on your income and score tier "
             "(up to $70,000 for High, $40,000 for Moderate, $20,000 for Low). Lenders decide the final amount.")
with st.expander("I'm on a work visa. Can I still borrow?"):
    st.write("Often, yes. Some lenders accept visa holders, usually with stricter terms. "
             "Check the eligibility notes on the Compare Lenders page.")
with st.expander("How can I raise my score quickly?"):
    st.write("Paying down monthly debts has the fastest effect. Credit history and income take longer. "
             "See the Improve Score page for steps.")

st.markdown("""
---

## What This Site Is Not
- It's **not** financial advice and **not** a credit decision.
- It does **not** replace a lender's full assessment.
""")
