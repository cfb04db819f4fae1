import base64

import streamlit as st
import dotenv

from waste_sorter.agents.classifier import DisposalClassifier
from waste_sorter.components.image_capture import capture_image, initialize_session, reset_session
from waste_sorter.components.result_card import render_result
from waste_sorter.exception import CustomException
from waste_sorter.llm.registry import available_providers
from waste_sorter.logger import get_logger
from waste_sorter.utils.image_payload import strip_data_uri

dotenv.load_dotenv()
logger = get_logger(__name__)

# Set page config once at the entry point
st.set_page_config(page_title="Waste Sorter", page_icon="♻️", layout="centered")

st.title("♻️ Waste Sorter")
st.write("Snap a photo of an item to find out whether it goes in recycling, compost or trash.")

initialize_session()

if 'classifier' not in st.session_state:
    st.session_state['classifier'] = DisposalClassifier()
classifier = st.session_state['classifier']

providers = available_providers()
provider = st.selectbox(
    "Vision model",
    providers,
    index=providers.index(classifier.default_provider),
)

if st.session_state['error']:
    st.error(st.session_state['error'])

image = capture_image()

if image:
    st.image(base64.b64decode(strip_data_uri(image)), caption="Captured item", width="stretch")

    if st.session_state['analysis'] is None:
        if st.button("Analyze", type="primary", width="stretch"):
            with st.spinner("Analyzing..."):
                try:
                    outcome = classifier.classify(image, model=provider)
                    st.session_state['analysis'] = outcome
                    st.session_state['error'] = None
                except CustomException as e:
                    logger.error("Error analyzing image: %s", e)
                    st.session_state['error'] = "Failed to analyze the image. Please try again."
            st.rerun()
    else:
        outcome = st.session_state['analysis']
        render_result(
            item=outcome.result.item,
            category=outcome.result.category,
            explanation=outcome.result.explanation,
            color=outcome.result.color,
            provider=outcome.provider,
        )

    if st.button("Start over", width="stretch"):
        reset_session()
        st.rerun()
