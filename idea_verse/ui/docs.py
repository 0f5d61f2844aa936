"""Methodology and architecture documentation tabs."""

import streamlit as st

import config


def render_methodology_tab() -> None:
    """Render the Methodology documentation tab."""
    st.markdown(f"""
## How the Map Is Built

Idea-Verse turns your notes into a small 3D constellation. Every time the
set of ideas changes, the whole map is rebuilt from scratch; nothing is
learned or cached between rebuilds, so the same ideas always produce the
same picture.

### 1. Similarity

Two ideas are compared by their text (title plus notes):

1. Lowercase both texts and split them into words. A word is a run of
   Latin letters/digits or a run of Hangul syllables.
2. If both texts have at least one word, similarity is the **Jaccard index**
   of the two word sets: shared words divided by all distinct words.
3. Otherwise, fall back to the Jaccard index of their character sets
   (whitespace removed).

Scores range from 0 (nothing in common) to 1 (same words).

### 2. Groups and Connections

Each idea belongs to its **first keyword's** group. An idea with a second
keyword is a *shared* idea and sits between both groups.

| Pair of ideas | Linked when similarity ≥ | Style |
|---------------|--------------------------|-------|
| Share a keyword | {config.SAME_KEYWORD_THRESHOLD} | solid, dotted below {config.WEAK_TIE_THRESHOLD} |
| No common keyword | {config.CROSS_KEYWORD_THRESHOLD} | gray |

Node size follows the number of links: **big** at {config.BIG_NODE_MIN_CONNECTIONS}+
links, **mid** at {config.MID_NODE_MIN_CONNECTIONS}, small otherwise.

### 3. Layout

- Group centers sit on a **golden-angle spiral** over a sphere, so groups
  spread evenly however many there are.
- Ideas inside a group start on their own spiral around the center and are
  nudged apart until they are at least {config.NODE_MIN_DISTANCE:.0f} units
  from their neighbors (up to {config.MAX_PLACEMENT_ATTEMPTS} tries each).
- Each group gets a box around its ideas; the box is only as large as it
  needs to be.
- Shared ideas go into the overlap of their two boxes. When the boxes
  don't overlap, they float near the midpoint between the two groups.

Placement uses a hash of the idea id instead of random numbers, so layouts
are reproducible.

### 4. Camera

The scene is rotated (tilt, turn, roll), panned and projected with
perspective: closer ideas look bigger. Everything is drawn back to front so
near ideas cover far ones.

- **Rotate / Tilt** buttons turn the scene
- **Pan** buttons slide it
- **Zoom** buttons step by {config.BUTTON_ZOOM_STEP} between
  {config.BUTTON_ZOOM_RANGE[0]}× and {config.BUTTON_ZOOM_RANGE[1]}×; the wheel
  slider zooms between {config.WHEEL_ZOOM_RANGE[0]}× and {config.WHEEL_ZOOM_RANGE[1]}×
- **Fit** returns to the starting view

### Limitations

Word overlap is not meaning: "car" and "automobile" are unrelated here, and
very short notes rarely connect. Connections are computed for every pair of
ideas, which is fine for a personal notebook but slows down with thousands
of ideas.
""")


def render_architecture_tab() -> None:
    """Render the Architecture documentation tab."""
    st.markdown("""
## System Architecture

```
┌──────────────┐     list / insert / update / delete
│  Idea store  │ ◄─────────────────────────────────┐
│ (json, mem)  │                                   │
└──────┬───────┘                                   │
       │ ideas                                     │
       ▼                                           │
┌──────────────┐   ┌───────────────┐   ┌───────────┴──┐
│ GraphBuilder │──►│ SpatialLayout │──►│   IdeaMap    │
│  similarity  │   │    Engine     │   │ orchestrator │
└──────────────┘   └───────────────┘   └──────┬───────┘
                                              │ graph
                                              ▼
┌─────────────────────┐   ┌──────────────┐   ┌──────────────┐
│ InteractionController│──►│ SceneBuilder │──►│ Plotly figure│
│   camera state      │   │  projection  │   │   builder    │
└─────────────────────┘   └──────────────┘   └──────────────┘
```

### Key Classes

| Class | Responsibility |
|-------|---------------|
| `IdeaMap` | Idea snapshot, rebuilds, optimistic writes |
| `BaseIdeaStore` | Owner-scoped persistence interface |
| `GraphBuilder` | Groups, connections, node sizes |
| `SpatialLayoutEngine` | 3D positions and group boxes |
| `CameraProjector` | Rotation and perspective projection |
| `InteractionController` | Rotate, pan, zoom, idle animation |
| `SceneBuilder` | Screen-space boxes, nodes and curves |
| `IdeaMapFigureBuilder` | Plotly rendering |

### Adding a Store Backend

```python
from idea_verse.store.base import BaseIdeaStore, register_store

@register_store("sqlite")
class SqliteIdeaStore(BaseIdeaStore):
    @property
    def name(self) -> str:
        return "sqlite"

    def _load_all(self):
        ...

    def _save_all(self, ideas):
        ...
```

Then set `IDEA_VERSE_STORE_BACKEND=sqlite` in your `.env`.
""")
