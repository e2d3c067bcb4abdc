"""
Ray tracer core: geometry, scene graph, shading and rendering
"""
