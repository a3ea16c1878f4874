from __future__ import annotations
import streamlit as st
import logging
import pandas as pd
import numpy as np
from typing import List, Dict, Tuple
import matplotlib.pyplot as plt
import networkx as nx
import io

from ngram_summarizer.config import SummarizerConfig
from ngram_summarizer.datatypes import TextUnit, EventSummary, NGramGraph
from ngram_summarizer.preprocessing import text_from_content, split_sentences
from ngram_summarizer.graphing import NGramGraphCreator, top_edges
from ngram_summarizer.matrix import SimilarityMatrixBuilder
from ngram_summarizer.scoring import find_redundant
from ngram_summarizer.summarize import DocumentEventClustering, summarize_event, summarize

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

def load_text_from_file(uploaded_file) -> str:
    """Load text content from uploaded file based on file type."""
    content = uploaded_file.read().decode("utf-8", errors="replace")
    return text_from_content(uploaded_file.name, content)

def preview(text: str, n: int = 80) -> str:
    return text[:n] + "..." if len(text) > n else text

def draw_sentence_clusters(event: EventSummary, sim_df: pd.DataFrame):
    """Sentence similarity graph (left) and heaviest essence edges (right)."""
    G = nx.Graph()
    labels = event.subtopics.labels()
    for i in range(len(event.sentences)):
        G.add_node(i, cluster=labels.get(i, -1))
    for i in range(len(event.sentences)):
        for j in range(i+1, len(event.sentences)):
            w = sim_df.iat[i, j]
            if w > 0:
                G.add_edge(i, j, weight=w)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(16, 8))

    ax1.set_title("Sentence Graph (colored by subtopic)", fontsize=14, fontweight='bold')
    if len(G.nodes) > 0:
        pos = nx.spring_layout(G, k=2, iterations=50, seed=42)
        cmap = plt.get_cmap('tab10')
        node_colors = [cmap(G.nodes[n]['cluster'] % 10) for n in G.nodes]
        nx.draw_networkx_nodes(G, pos, ax=ax1, node_color=node_colors, node_size=800, alpha=0.8)
        edges = G.edges(data=True)
        if edges:
            weights = [d['weight'] for _, _, d in edges]
            max_weight = max(weights) if weights else 1
            nx.draw_networkx_edges(G, pos, ax=ax1, width=[3 * (w / max_weight) for w in weights],
                                   alpha=0.6, edge_color='gray')
        nx.draw_networkx_labels(G, pos, {i: f"S{i+1}" for i in G.nodes()}, ax=ax1,
                                font_size=10, font_weight='bold')
        if len(G.nodes) <= 10:
            edge_labels = {(u, v): f"{d['weight']:.2f}" for u, v, d in G.edges(data=True)}
            nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax1, font_size=8)
    ax1.axis('off')

    ax2.set_title("Event Essence (top 25 edges)", fontsize=14, fontweight='bold')
    E = NGramGraph(edges=dict(top_edges(event.essence, 25))).to_networkx()
    if len(E.nodes) > 0:
        pos2 = nx.spring_layout(E, seed=42)
        widths = [3 * d['weight'] for _, _, d in E.edges(data=True)]
        nx.draw_networkx_nodes(E, pos2, ax=ax2, node_color='lightyellow', node_size=700, alpha=0.9)
        nx.draw_networkx_edges(E, pos2, ax=ax2, width=widths, alpha=0.6, edge_color='orange',
                               arrows=True)
        nx.draw_networkx_labels(E, pos2, {v: repr(v) for v in E.nodes}, ax=ax2, font_size=8)
    ax2.axis('off')

    plt.tight_layout()
    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close()
    return buf

def create_sidebar_controls() -> Tuple[SummarizerConfig, bool]:
    """Create sidebar controls for parameters."""
    st.sidebar.header("N-gram Graphs")
    min_n = st.sidebar.number_input("Min n", min_value=1, max_value=10, value=3)
    max_n = st.sidebar.number_input("Max n", min_value=1, max_value=10, value=3)
    window = st.sidebar.number_input("Correlation window", min_value=1, max_value=10, value=3)

    st.sidebar.header("Markov Clustering")
    inflation = st.sidebar.slider("Inflation power", min_value=1.1, max_value=6.0, value=2.0, step=0.1)
    epsilon = st.sidebar.slider("Prune epsilon", min_value=0.0, max_value=0.5, value=0.05, step=0.01)
    max_iter = st.sidebar.number_input("Max iterations", min_value=1, max_value=1000, value=100)

    st.sidebar.header("Selection")
    blend = st.sidebar.slider("Blend factor", min_value=0.05, max_value=0.95, value=0.5, step=0.05,
                              help="Weight of the running graph when intersecting/merging")
    threshold = st.sidebar.slider("Redundancy threshold", min_value=0.0, max_value=1.0, value=0.2,
                                  step=0.05, help="Drop sentences more similar than this to a kept one")

    st.sidebar.header("Debug Options")
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=True, help="Show detailed pipeline steps")

    cfg = SummarizerConfig(min_n=int(min_n), max_n=max(int(min_n), int(max_n)), window=int(window),
                           inflation_power=inflation, prune_epsilon=epsilon,
                           max_iterations=int(max_iter), blend_factor=blend,
                           redundancy_threshold=threshold, num_partitions=1)
    return cfg, debug_mode

def debug_event(event: EventSummary, cfg: SummarizerConfig):
    """Show every sentence-level stage of one event."""
    sentences = event.sentences

    st.subheader("Step 2: Sentences")
    st.dataframe(pd.DataFrame([{"Sentence #": i+1, "Text": s} for i, s in enumerate(sentences)]),
                 use_container_width=True)

    st.subheader("Step 3: Sentence Similarity Matrix")
    builder = SimilarityMatrixBuilder(NGramGraphCreator.from_config(cfg))
    matrix = builder.build(sentences)
    sim_df = matrix.to_frame()
    n = len(sentences)
    if n <= 50:
        st.dataframe(sim_df.round(3), use_container_width=True)
    else:
        flat = [matrix.get(i, j) for i in range(n) for j in range(i+1, n)]
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Max Similarity", f"{max(flat):.3f}")
        with col2:
            st.metric("Mean Similarity", f"{np.mean(flat):.3f}")
        with col3:
            st.metric("Nonzero Pairs", sum(1 for v in flat if v > 0))

    st.subheader("Step 4: Subtopics (Markov Clustering)")
    if not event.subtopics.converged:
        st.warning(f"MCL stopped after {event.subtopics.iterations} iterations without converging")
    clusters_data = []
    for (cid, members), g in zip(event.subtopics.clusters.items(), event.subtopic_graphs):
        clusters_data.append({
            "Subtopic": cid,
            "Sentences": ", ".join(f"S{m+1}" for m in members),
            "Intersected Edges": g.num_edges,
        })
    st.dataframe(pd.DataFrame(clusters_data), use_container_width=True)

    st.subheader("Step 5: Event Essence")
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Essence Vertices", event.essence.num_vertices)
    with col2:
        st.metric("Essence Edges", event.essence.num_edges)
    if n <= 50:
        try:
            st.image(draw_sentence_clusters(event, sim_df), caption="Subtopics and essence graph",
                     use_column_width=True)
        except Exception as e:
            st.error(f"Could not generate graph visualization: {str(e)}")

    st.subheader("Step 6-7: Scoring and Redundancy")
    redundant = find_redundant([s for _, s in event.ranking], cfg.redundancy_threshold,
                               NGramGraphCreator.from_config(cfg))
    st.dataframe(pd.DataFrame([{
        "Rank": r+1,
        "Value Similarity": f"{score:.4f}",
        "Kept": "✅" if not redundant[r] else "❌",
        "Text": preview(s),
    } for r, (score, s) in enumerate(event.ranking)]), use_container_width=True)

def debug_pipeline(documents: List[TextUnit], cfg: SummarizerConfig) -> Dict[int, List[str]]:
    """Run the pipeline with detailed debugging information."""
    st.header("Step 1: Event Detection")
    with st.spinner("Clustering documents into events..."):
        events = DocumentEventClustering(cfg).get_clusters(documents)
    st.success(f"✅ Detected {len(events)} events in {len(documents)} documents")
    st.dataframe(pd.DataFrame([{
        "Event": cid,
        "Documents": ", ".join(d.source or f"doc {d.uid}" for d in docs),
    } for cid, docs in events.items()]), use_container_width=True)

    summaries: Dict[int, List[str]] = {}
    for cid, docs in events.items():
        with st.expander(f"Event {cid}", expanded=len(events) <= 3):
            with st.spinner(f"Summarizing event {cid}..."):
                event = summarize_event(cid, docs, cfg, split_sentences)
            debug_event(event, cfg)
        summaries[cid] = event.summary
    return summaries

def main():
    st.title("N-gram Graph Multi-document Summarizer")
    st.write("Upload text files; related documents are grouped into events and each event is summarized")

    cfg, debug_mode = create_sidebar_controls()

    uploaded_files = st.file_uploader(
        "Choose text files",
        type=['txt', 'rtf', 'md'],
        accept_multiple_files=True,
        help="Upload the documents to summarize (supports .txt, .rtf, .md formats)"
    )

    if uploaded_files:
        documents = [TextUnit(uid=i, text=load_text_from_file(f), source=f.name)
                     for i, f in enumerate(uploaded_files)]
        st.subheader(f"Documents ({len(documents)})")
        st.dataframe(pd.DataFrame([{
            "Document": d.source,
            "Words": len(d.text.split()),
            "Sentences": len(split_sentences(d)),
        } for d in documents]), use_container_width=True)

        if st.button("Generate Summary", type="primary"):
            try:
                if debug_mode:
                    st.markdown("---")
                    st.title("🔍 Pipeline Debug Mode")
                    result = debug_pipeline(documents, cfg)
                else:
                    with st.spinner("Generating summaries..."):
                        result = summarize(documents, cfg)

                st.markdown("---")
                st.header("📋 Final Summaries")
                for cid, sentences in result.items():
                    text = "\n".join(sentences)
                    st.text_area(f"Event {cid}", text, height=150, disabled=True)
                    st.download_button(f"Download event {cid}", text, file_name=f"summary_{cid}.txt")

                total_words = sum(len(d.text.split()) for d in documents)
                summary_words = sum(len(s.split()) for ss in result.values() for s in ss)
                col1, col2, col3 = st.columns(3)
                with col1:
                    st.metric("Original Length", total_words)
                with col2:
                    st.metric("Summary Length", summary_words)
                with col3:
                    st.metric("Actual Compression", f"{summary_words / total_words:.2%}" if total_words else "n/a")

            except Exception as e:
                st.error(f"Error generating summary: {str(e)}")
                st.exception(e)

if __name__ == "__main__":
    main()
