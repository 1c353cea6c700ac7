"""Promptdeck client side: session state, controllers and the Gradio shell.

Modules
-------
models
    Turn, Transcript, session state dataclasses and render views.
client
    httpx client for the relay endpoints.
transcript
    Conversation submit cycle and rendering.
gallery
    Image generation submit cycle and rendering.
validation
    Form validation with user-facing messages.
state
    Session state creation and controller wiring.
handlers
    Gradio event handlers.
app
    Gradio Blocks layout and the ``promptdeck-ui`` entry point.
"""
