"""
Cartoon Studio – turns a short prose script into an animated cartoon video.

Use from code:
  from cartoon_studio.application.pipeline import CartoonPipeline, GenerateOptions
  from cartoon_studio.adapters import default_adapters
  pipeline = CartoonPipeline(**default_adapters())
  result = pipeline.generate(GenerateOptions(title=..., script=..., palette=[...], style=...))

Or from the shell:
  python -m cartoon_studio --title "Launch day" --script "Hello. World!" --palette "#38BDF8,#FACC15,#F472B6"
"""

__version__ = "0.1.0"
