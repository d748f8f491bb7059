"""
Visualization utilities for batch compression results.
"""

from typing import Any, Dict, List

import plotly.graph_objects as go

from compression.batch import BatchItemResult
from compression.models import SizeTarget


def create_size_comparison_chart(results: List[BatchItemResult],
                                 target: SizeTarget,
                                 title: str = "File Size Before / After") -> go.Figure:
    """
    Create grouped bar chart of original vs output size per file.

    Args:
        results: Batch results
        target: Target drawn as a shaded band
        title: Chart title

    Returns:
        Plotly figure
    """
    names = [r.output_filename for r in results]
    before = [r.original_size / 1024 for r in results]
    after = [r.compressed_size / 1024 for r in results]

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=names,
        y=before,
        name="Original (KB)",
        marker_color="#a8a8b3",
        hovertemplate="%{x}<br>Original: %{y:.1f} KB<extra></extra>",
    ))
    fig.add_trace(go.Bar(
        x=names,
        y=after,
        name="Compressed (KB)",
        marker_color="#e94560",
        hovertemplate="%{x}<br>Compressed: %{y:.1f} KB<extra></extra>",
    ))

    # Target band
    fig.add_hrect(
        y0=target.min_bytes / 1024,
        y1=target.max_bytes / 1024,
        fillcolor="#2ecc71",
        opacity=0.15,
        line_width=0,
        annotation_text=target.label,
        annotation_position="top left",
    )

    fig.update_layout(
        title=dict(
            text=title,
            font=dict(size=20, color="#2c3e50")
        ),
        barmode="group",
        yaxis_title="Size (KB)",
        template="plotly_white",
        legend=dict(
            yanchor="top",
            y=0.99,
            xanchor="right",
            x=0.99,
            bgcolor="rgba(255,255,255,0.8)"
        ),
        margin=dict(l=60, r=60, t=80, b=60),
    )

    return fig


def create_result_cards(results: List[BatchItemResult],
                        target: SizeTarget) -> List[Dict[str, Any]]:
    """
    Create data for per-file result cards.

    Args:
        results: Batch results
        target: Target used for the batch

    Returns:
        List of card data dictionaries
    """
    cards = []

    for result in results:
        if result.error:
            status = "Failed"
            color = "#e74c3c"
        elif result.in_target(target):
            status = "In target" if result.reencoded else "Already in target"
            color = "#2ecc71"
        elif result.reencoded:
            status = "Best effort"
            color = "#f1c40f"
        else:
            status = "Original kept"
            color = "#e67e22"

        cards.append({
            "filename": result.output_filename,
            "original_kb": round(result.original_size / 1024, 2),
            "compressed_kb": round(result.compressed_size / 1024, 2),
            "saved_percent": round(result.saved_percent, 1),
            "status": status,
            "color": color,
        })

    return cards
