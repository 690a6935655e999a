"""Taichi-based Whitted ray tracer.

This package renders static scenes with recursive Whitted ray tracing:
- Phong diffuse and specular shading from point lights, with shadow rays
- Mirror reflection and Snell refraction followed to a fixed depth
- Spheres and bounded checkerboard floors
- One primary ray per pixel, all pixels traced in parallel

Subpackages:
    core: Vector utilities, light transport and the render loop
    geometry: Shape primitives and intersection algorithms
    materials: Phong material registry
    scene: Scene description, storage and nearest-hit queries
    camera: Pinhole camera with primary ray generation
    preview: Tone mapping, image export and preview utilities
"""

__version__ = "0.1.0"
