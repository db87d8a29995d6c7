from traces import Step, StepKind, Trace, TraceMetadata


def make_trace(n: int = 10) -> Trace:
    steps = tuple(
        Step(i, StepKind.VISIT, {"node": i, "label": f"Visit {i}"})
        for i in range(n)
    )
    return Trace(steps=steps, metadata=TraceMetadata("O(n)", "O(1)"))
