"""
mock.py — Bundled Sample Trace
===============================
A fake BFS-style run that touches every step kind the renderer has to
draw.  No algorithm executes here; the steps are written out by hand.
"""

from traces.step import Step, StepKind, Trace, TraceMetadata


MOCK_TRACE = Trace(
    steps=(
        Step(0, StepKind.VISIT,    {"node": 1, "label": "Start node"}),
        Step(1, StepKind.COMPARE,  {"a": 1, "b": 2, "label": "Compare neighbors"}),
        Step(2, StepKind.VISIT,    {"node": 2, "label": "Move to node 2"}),
        Step(3, StepKind.FRONTIER, {"nodes": [3, 4], "label": "Add to frontier"}),
        Step(4, StepKind.COMPARE,  {"a": 2, "b": 3, "label": "Evaluate cost"}),
        Step(5, StepKind.VISIT,    {"node": 3, "label": "Visit node 3"}),
        Step(6, StepKind.PIVOT,    {"node": 3, "label": "Set as pivot"}),
        Step(7, StepKind.SWAP,     {"i": 0, "j": 3, "label": "Swap elements"}),
        Step(8, StepKind.VISIT,    {"node": 4, "label": "Visit node 4"}),
        Step(9, StepKind.PATH,     {"nodes": [1, 2, 3, 4], "label": "Final path found"}),
    ),
    metadata=TraceMetadata(
        time_complexity="O(V + E)",
        space_complexity="O(V)",
        notes="Mock BFS-style trace for engine validation. No real algorithm runs here.",
    ),
)
