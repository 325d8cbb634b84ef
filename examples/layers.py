"""Build a scene graph by hand and print its layers.

Run with: python examples/layers.py
"""

from storydag import DAG, CycleDetectedError, render_dot

scenes = DAG(
    {
        "prologue": {"market", "harbour"},
        "market": {"chase"},
        "harbour": {"chase", "storm"},
        "chase": {"reunion"},
        "storm": {"reunion"},
    },
)

for index, layer in enumerate(scenes.antichains()):
    print(f"layer {index}: {', '.join(sorted(layer))}")

print("order:", " -> ".join(scenes.topo_sort()))
print(render_dot(scenes, title="Voyage", rankdir="LR"))

try:
    DAG({"dawn": {"dusk"}, "dusk": {"dawn"}})
except CycleDetectedError as e:
    print(f"rejected: {e}")
