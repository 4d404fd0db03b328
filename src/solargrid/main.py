"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Session Model (SceneState).
2. Instantiates the Main Window (View) and its frame clock.
3. Passes the Model into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
import os
import sys

from solargrid import config
from solargrid.application import create_app
from solargrid.logging_config import level_from_name, setup_logging
from solargrid.model.state import SceneState
from solargrid.view.main_window import MainWindow


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # SOLARGRID_LOG_LEVEL=DEBUG shows parameter updates during development
    setup_logging(level=level_from_name(os.environ.get(config.LOG_LEVEL_ENV)))

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Data Model
    scene = SceneState()

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(scene)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
