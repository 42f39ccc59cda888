"""Layers and the ordered stack that holds them."""

from __future__ import annotations

from collections.abc import Iterator

from janji.events import Event
from janji.timestep import Timestep


class Layer:
    """A slice of the application that receives updates, UI passes and events.

    The base hooks keep a little bookkeeping so a plain layer can be inspected;
    subclasses override them with their own work.
    """

    def __init__(self, name: str = "Layer") -> None:
        self.name = name
        self.attached = False
        self.last_timestep: Timestep | None = None
        self.ui_passes = 0
        self.events_seen = 0

    def on_attach(self) -> None:
        """Called once when the layer is pushed onto a stack."""
        self.attached = True

    def on_detach(self) -> None:
        """Called once when the layer is popped from a stack."""
        self.attached = False

    def on_update(self, timestep: Timestep) -> None:
        """Called every frame with the time elapsed since the previous one."""
        self.last_timestep = timestep

    def on_imgui_render(self) -> None:
        """Called every frame during the user-interface pass."""
        self.ui_passes += 1

    def on_event(self, event: Event) -> None:
        """Called for every event that reaches this layer."""
        self.events_seen += 1

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class LayerStack:
    """Ordered layers: plain layers first, overlays always after them."""

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._insert_index = 0

    def push_layer(self, layer: Layer) -> None:
        """Insert ``layer`` after the other layers but before every overlay."""
        self._layers.insert(self._insert_index, layer)
        self._insert_index += 1
        layer.on_attach()

    def push_overlay(self, overlay: Layer) -> None:
        """Append ``overlay`` at the very top of the stack."""
        self._layers.append(overlay)
        overlay.on_attach()

    def pop_layer(self, layer: Layer) -> bool:
        """Detach and remove ``layer`` if it is among the plain layers."""
        for position, candidate in enumerate(self._layers[: self._insert_index]):
            if candidate is layer:
                layer.on_detach()
                del self._layers[position]
                self._insert_index -= 1
                return True
        return False

    def pop_overlay(self, overlay: Layer) -> bool:
        """Detach and remove ``overlay`` if it is among the overlays."""
        for offset, candidate in enumerate(self._layers[self._insert_index :]):
            if candidate is overlay:
                overlay.on_detach()
                del self._layers[self._insert_index + offset]
                return True
        return False

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    def __reversed__(self) -> Iterator[Layer]:
        return reversed(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)