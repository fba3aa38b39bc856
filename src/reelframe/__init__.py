"""reelframe — real-time branded frame composition for short videos.

Letterbox a video into a 9:16 canvas under a title bar and accent badge,
redraw it every display refresh, and export the current frame as PNG.
Share links are resolved to direct video URLs, and the result can be
handed to an external design tool.
"""
