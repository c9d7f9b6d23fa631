"""Three-voice chord: A4, C4 and F4 entering one second apart.

Each voice is a vibrato'd sine gated by its own ADSR envelope; the voices are
summed into a single mono signal that is duplicated across output channels.
"""

from tonegraph import demo_chord, play, validate_graph

graph = demo_chord()

if __name__ == "__main__":
    errors = validate_graph(graph)
    if errors:
        print("Validation errors:")
        for e in errors:
            print(f"  - {e}")
    else:
        print("Graph is valid.")
    print()
    print(graph.model_dump_json(indent=2))
    play(graph)
