"""
The VIEW layer: PySide6 widgets and the PyVista scene.
It reads from SceneState and forwards user input; it holds no layout logic.
"""
