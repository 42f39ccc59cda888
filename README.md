# janji

A small framework for 2D programs. An `Application` owns a window and a
stack of layers. Input from the window arrives as typed events that travel
down the stack from the topmost overlay until a layer marks them handled.
Each frame every layer is updated with the time elapsed since the previous
one. Quads are collected by a batching 2D renderer seen through an
orthographic camera.

## Installation

```
pip install janji
```

To run the test suite:

```
pip install "janji[test]"
pytest
```

## The sandbox command

```
janji-sandbox [--title TITLE] [--width WIDTH] [--height HEIGHT]
```

This opens a resizable window (default title `Janji`, 1280 x 720) and runs
the `Sandbox` application from `janji.sandbox` until the window is closed.
The sandbox has a single `SandboxLayer`. That layer counts frames, elapsed
time and events, and logs each event at trace level. It draws nothing.

## Building blocks

### Layers (`janji.layer`)

Subclass `Layer` and override the hooks you need: `on_attach`, `on_detach`,
`on_update`, `on_imgui_render` and `on_event`. A `LayerStack` keeps ordinary
layers below overlays:

- `push_layer` inserts a layer beneath every overlay.
- `push_overlay` puts a layer on top of the stack.
- `pop_layer` and `pop_overlay` detach and remove a layer, and return whether it was found.

Iterating a stack walks it from bottom to top. `reversed(stack)` walks it
from top to bottom, which is the order events are delivered in.

```python
from janji.layer import Layer, LayerStack


class Hud(Layer):
    def on_update(self, timestep):
        print(f"frame took {timestep.milliseconds:.2f} ms")


stack = LayerStack()
stack.push_layer(Layer("World"))
stack.push_overlay(Hud("Hud"))
print([layer.name for layer in reversed(stack)])  # ['Hud', 'World']
```

### Events (`janji.events`)

The module defines these event classes:

- Window events: `WindowResizeEvent`, `WindowMinimizedEvent`, `WindowCloseEvent`.
- Application events: `AppTickEvent`, `AppUpdateEvent`, `AppRenderEvent`.
- Keyboard events: `KeyPressedEvent`, `KeyReleasedEvent`.
- Mouse events: `MouseMovedEvent`, `MouseScrolledEvent`, `MouseButtonPressedEvent`, `MouseButtonReleasedEvent`.

`NativeEvent` wraps a raw event from the window backend by kind name.

Every event has the following:

- An `event_type` (an `EventType`).
- Category flags that `is_in_category` tests against an `EventCategory`.
- A `handled` flag.
- A readable `str()`, for example `WindowResizeEvent: 1280, 720`.

`EventDispatcher.dispatch(event_class, func)` calls `func` only when the
event is of that class's type. The return value of `func` becomes the
event's `handled` flag.

```python
from janji.events import EventDispatcher, WindowResizeEvent

event = WindowResizeEvent(1280, 720)
EventDispatcher(event).dispatch(WindowResizeEvent, lambda e: True)
print(event.handled)  # True
```

### Application (`janji.application`)

`Application(window=None)` does the following when it is created:

- Initialises logging and memory statistics.
- Creates a window unless one is given.
- Sends every window event to `on_event`.
- Initialises the renderer.

Only one application may exist at a time, and `get_application()` returns
it.

Window events are handled as follows:

- A close event stops `run()`.
- A resize to zero width or height counts as minimised. Any other resize sets the viewport.
- A minimise event pauses layer updates.

`run_frame(timestep)` updates every layer and calls its `on_imgui_render`
hook unless the application is minimised. It then updates the window.
`close()`, or leaving a `with` block, shuts everything down.

### Window and input (`janji.window`, `janji.input`)

`Window` wraps a native window with a graphics context. On creation it
centres itself on the screen and becomes visible. It turns native resize,
close, hide/show, key, mouse button, wheel and motion notifications into
the engine events above. Each of those is followed by a `NativeEvent`.
`create_window(WindowSettings(...))` creates one.

Key and mouse state is also recorded in the current `Input` backend. You can
query it with `is_key_pressed(Scancode.W)`, `is_mouse_button_pressed(1)`,
`get_mouse_position()`, `get_mouse_x()` and `get_mouse_y()`. Replace the
backend with `set_input`. The `set_key`, `set_mouse_button` and
`set_mouse_position` methods of `Input` let you drive it by hand.

### Camera (`janji.camera`, `janji.camera_controller`)

`OrthographicCamera` keeps its `projection_matrix`, `view_matrix` and
`view_projection_matrix` (4x4 float32 numpy arrays) in step with its
`position`, `rotation` (degrees) and `zoom`. The module also provides the
helpers `ortho`, `translation`, `rotation_z` and `scaling`.

`OrthographicCameraController(aspect_ratio, rotation=False)` drives a camera
from input:

- WASD or the arrow keys pan.
- Q and E rotate, when rotation is enabled.
- The mouse wheel zooms, down to a zoom level of 0.25.
- Window resize events update the aspect ratio.

### Rendering (`janji.renderer`, `janji.shader`, `janji.texture`, `janji.buffer`, `janji.vertex_array`, `janji.renderer_api`)

`Renderer2D` batches quads into one vertex store of up to 20000 quads and
32 texture slots. Slot 0 holds a white texture. `draw_quad` takes a `color`,
or a `texture` with an optional `tiling_factor`, `tint_color` and
`sprite_index` (48 x 48 cells of a 1536 x 2304 sheet). `draw_rotated_quad`
adds a rotation in degrees.

A batch is drawn by `end_scene()`, and also whenever the quads or the
texture slots run out. The `stats` property returns a `Statistics` with
`draw_calls`, `quad_count`, `total_vertex_count()` and
`total_index_count()`.

Drawing commands go to a `GraphicsDevice`. The default device is a
`RecordingDevice`, which only logs the calls it receives. A `Window`
installs an OpenGL device for its context.

```python
from janji import renderer_api
from janji.camera import OrthographicCamera
from janji.renderer import Renderer2D
from janji.shader import create_shader_with_source

device = renderer_api.RecordingDevice()
renderer_api.set_device(device)

batch = Renderer2D(shader=create_shader_with_source("Flat", "vertex code", "fragment code"))
batch.begin_scene(OrthographicCamera(-1.6, 1.6, -0.9, 0.9))
batch.draw_quad((0.0, 0.0), (1.0, 1.0), color=(0.8, 0.2, 0.3, 1.0))
batch.end_scene()
print(batch.stats)       # Statistics(draw_calls=1, quad_count=1)
print(device.calls[-2])  # ('draw_triangles', 6)
```

Without an explicit shader, `Renderer2D` and `renderer.init()` read
`Assets/Shaders/Texture.glsl`.

`janji.shader` splits a combined file into stages separated by
`#type vertex` and `#type fragment` (or `pixel`) lines. `ShaderLibrary`
stores shaders by name. `load_texture(path)` loads an image as an RGBA
`Texture2D` with its rows flipped so that row 0 is the bottom.
`BufferLayout` computes attribute offsets and the stride.

### Logging and assertions (`janji.log`)

`initialize()` sets up the `CORE` logger, which writes every level, down to
trace, to standard output. `core_assert(condition, message)` logs a
critical "Assertion Failure" line and raises `CoreAssertionError`.

### Profiling (`janji.instrumentor`)

This module writes Chrome trace-event JSON files. Only one session is open
at a time.

```python
from janji.instrumentor import InstrumentationTimer, get_instrumentor

profiler = get_instrumentor()
profiler.begin_session("Startup", "profile-startup.json")
with InstrumentationTimer("load assets"):
    ...
profiler.end_session()
```

### Memory accounting (`janji.memory`)

`allocate(size, tag)` and `free(block, size, tag)` keep byte counts for
each `MemoryTag`. `get_memory_usage()` renders them as a table in B, KiB,
MiB or GiB.

### Timing (`janji.timestep`)

`Timestep` holds a frame's duration. It has the properties `seconds` and
`milliseconds`, and it takes part in arithmetic as a float.

## What it does not do

- There is no user-interface toolkit. `on_imgui_render` is only a per-frame hook, and nothing draws panels or widgets.
- Shaders keep their source text and record the uniforms set on them, but they are not compiled on the GPU.
- Vertex, index and texture data stay in host memory. The OpenGL device only sets blending, depth testing, the viewport and the clear colour, clears, and issues indexed draw calls. Batched quads therefore do not appear on screen.