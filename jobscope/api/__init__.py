"""
HTTP and WebSocket surface for jobscope.
"""
