"""
Target-Size Image Compressor - Streamlit Application

Upload a batch of photos, pick a size range, and get JPEGs that fit it while
keeping as much resolution and quality as the budget allows.
"""

import logging

import streamlit as st

from config import DEFAULT_PRESET, RANGE_PRESETS
from compression import SizeTarget, SizeFitCompressor, compress_batch, create_download_package, generate_report
from utils.image_utils import format_size
from utils.visualization import create_size_comparison_chart, create_result_cards


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Page configuration
st.set_page_config(
    page_title="Target-Size Image Compressor",
    page_icon="🗜️",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        background: linear-gradient(90deg, #e94560, #ff6b6b);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        font-size: 2.5rem;
        font-weight: 700;
        text-align: center;
        margin-bottom: 0.5rem;
    }

    .sub-header {
        color: #a8a8b3;
        text-align: center;
        font-size: 1.1rem;
        margin-bottom: 2rem;
    }

    .result-card {
        border-radius: 12px;
        padding: 0.8rem;
        text-align: center;
        border: 2px solid rgba(255, 255, 255, 0.08);
    }
</style>
""", unsafe_allow_html=True)


def init_session_state():
    """Initialize session state variables."""
    if 'results' not in st.session_state:
        st.session_state.results = []
    if 'target' not in st.session_state:
        st.session_state.target = None


def display_results(results, target: SizeTarget, mime: str):
    """Show per-file cards, previews and download buttons."""
    cards = create_result_cards(results, target)

    for result, card in zip(results, cards):
        col1, col2, col3 = st.columns([1, 2, 1])

        with col1:
            if result.error is None:
                st.image(result.output_bytes, width='stretch')

        with col2:
            st.markdown(
                f'<div class="result-card" style="border-color: {card["color"]}">'
                f'<strong>{card["filename"]}</strong><br>{card["status"]}</div>',
                unsafe_allow_html=True
            )
            metric_cols = st.columns(3)
            metric_cols[0].metric("Original", format_size(result.original_size))
            metric_cols[1].metric("Compressed", format_size(result.compressed_size))
            metric_cols[2].metric("Saved", f"{card['saved_percent']}%")
            if result.error:
                st.caption(f"↳ {result.error}")

        with col3:
            st.download_button(
                label="📥 Download",
                data=result.output_bytes,
                file_name=result.output_filename,
                mime=mime if result.reencoded else None,
                key=f"download_{result.filename}_{id(result)}",
            )

    st.plotly_chart(create_size_comparison_chart(results, target), width='stretch')


def main():
    """Main application entry point."""
    init_session_state()

    st.markdown('<h1 class="main-header">Target-Size Image Compressor</h1>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">Fit your photos into a file size budget</p>', unsafe_allow_html=True)

    compressor = SizeFitCompressor()
    preset_values = [value for value, _ in RANGE_PRESETS]
    preset_labels = dict(RANGE_PRESETS)

    with st.sidebar:
        st.markdown("## ⚙️ Settings")

        preset = st.selectbox(
            "Target size",
            preset_values,
            index=preset_values.index(DEFAULT_PRESET),
            format_func=lambda value: preset_labels[value],
        )
        width_limit = st.slider(
            "Maximum width (px)",
            min_value=400, max_value=4000, step=100,
            value=compressor.config["width_limit"],
            help="Wider images are scaled down to this width before compressing"
        )

    uploaded_files = st.file_uploader(
        "Upload images to compress",
        type=['jpg', 'jpeg', 'png', 'bmp', 'tiff', 'webp'],
        accept_multiple_files=True,
        help="Supported formats: JPG, PNG, BMP, TIFF, WebP"
    )

    if not uploaded_files:
        st.info("📤 Select one or more images to get started.")
        return

    target = SizeTarget.from_preset(preset)

    if st.button("🚀 Compress Images", type="primary", width='stretch'):
        progress_bar = st.progress(0)
        status_text = st.empty()
        status_text.text("Preparing to compress...")

        def report_progress(index, total):
            progress_bar.progress(index / total)
            status_text.text(f"Processed {index}/{total} ({round(index / total * 100)}%)")

        files = [(f.name, f.getvalue()) for f in uploaded_files]
        st.session_state.results = compress_batch(
            files, target,
            compressor=compressor,
            progress=report_progress,
            width_limit=width_limit,
        )
        st.session_state.target = target

        total = len(files)
        status_text.text(f"Compression completed! Processed {total} image{'s' if total > 1 else ''}.")

    results = st.session_state.results
    if results and st.session_state.target is not None:
        st.markdown("---")
        display_results(results, st.session_state.target, compressor.mime)

        st.markdown("---")
        col1, col2 = st.columns(2)
        with col1:
            st.download_button(
                label="📦 Download All (ZIP)",
                data=create_download_package(results),
                file_name="compressed_images.zip",
                mime="application/zip",
                width='stretch'
            )
        with col2:
            st.download_button(
                label="📄 Download Report",
                data=generate_report(results, st.session_state.target),
                file_name="compression_report.txt",
                mime="text/plain",
                width='stretch'
            )


if __name__ == "__main__":
    main()
