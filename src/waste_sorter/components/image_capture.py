import streamlit as st

from waste_sorter.utils.image_payload import bytes_to_data_uri
from waste_sorter.logger import get_logger

logger = get_logger(__name__)


def initialize_session():
    """Ensures session state keys exist."""
    if 'captured_image' not in st.session_state:
        st.session_state['captured_image'] = None
    if 'analysis' not in st.session_state:
        st.session_state['analysis'] = None
    if 'error' not in st.session_state:
        st.session_state['error'] = None
    if 'use_camera' not in st.session_state:
        st.session_state['use_camera'] = False
    if 'uploader_key' not in st.session_state:
        st.session_state['uploader_key'] = 0


def reset_session():
    st.session_state['captured_image'] = None
    st.session_state['analysis'] = None
    st.session_state['error'] = None
    st.session_state['use_camera'] = False
    # A fresh key clears the file uploader widget
    st.session_state['uploader_key'] += 1


def capture_image():
    """
    Lets the user take a camera snapshot or pick a local file.
    Stores the image as a data URI in session state and returns it.
    """
    initialize_session()

    if st.session_state['captured_image']:
        return st.session_state['captured_image']

    st.write("Take a photo or upload an image of the item")
    col_camera, col_upload = st.columns(2)
    with col_camera:
        if st.button("📸 Camera", width="stretch"):
            st.session_state['use_camera'] = True
            st.session_state['error'] = None
    with col_upload:
        uploaded = st.file_uploader(
            "🖼️ Upload",
            type=["png", "jpg", "jpeg", "webp"],
            key=f"item_uploader_{st.session_state['uploader_key']}",
        )

    source = None
    if st.session_state['use_camera']:
        source = st.camera_input("Point the camera at the item", key=f"item_camera_{st.session_state['uploader_key']}")
        if st.button("Cancel"):
            st.session_state['use_camera'] = False
            st.rerun()

    source = source or uploaded
    if source is None:
        return None

    try:
        image_bytes = source.getvalue()
        st.session_state['captured_image'] = bytes_to_data_uri(image_bytes, mime_type=getattr(source, "type", None))
        st.session_state['use_camera'] = False
        st.session_state['analysis'] = None
        st.session_state['error'] = None
        logger.info("Captured image (%d bytes)", len(image_bytes))
    except Exception as e:
        logger.error("Error reading image: %s", e)
        st.session_state['error'] = "Could not read the selected image."
        return None

    st.rerun()
