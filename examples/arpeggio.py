"""Arpeggio built with explicit combinators instead of operators.

Four notes of an A minor seventh, each opening a short window 0.4 s after the
previous one, mixed with ``mix`` and scaled down to leave headroom.
"""

from tonegraph import BinOp, Graph, Key, adsr, mix, play, validate_graph

notes = [Key.A.note(3), Key.C.note(4), Key.E.note(4), Key.G.note(4)]

voices = [
    BinOp(
        op="mul",
        a=note.sine(),
        b=adsr((0.4 * i, 0.4 * i + 0.3), 20.0, 4.0, 0.7, 2.0),
    )
    for i, note in enumerate(notes)
]

graph = Graph(
    name="arpeggio",
    duration=2.5,
    root=BinOp(op="mul", a=mix(*voices), b=0.5),
)

if __name__ == "__main__":
    errors = validate_graph(graph)
    if errors:
        print("Validation errors:")
        for e in errors:
            print(f"  - {e}")
    else:
        print("Graph is valid.")
    play(graph)
