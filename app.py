"""
OceanViz Dashboard Application

This is the main entry point for the OceanViz dashboard application.
It assembles the layout, the controller and its callbacks, and loads the
datasets once the page has been rendered.

Usage
-----
Run with panel serve:
    $ panel serve app.py --show --port 5006

Or run directly:
    $ python app.py

The dashboard will be available at http://localhost:5006
"""

import logging

import panel as pn
import holoviews as hv

# Suppress Bokeh warnings
from bokeh.core.validation import silence
from bokeh.core.validation.warnings import FIXED_SIZING_MODE
silence(FIXED_SIZING_MODE, True)

# Initialize extensions
hv.extension('bokeh')
pn.extension(notifications=True)

# Import OceanViz modules
from oceanviz.config import OceanVizConfig
from oceanviz.ui import create_dashboard
from oceanviz.controllers import OceanVizController

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)
logger = logging.getLogger(__name__)

TITLE = "Ocean Change Explorer"


# =============================================================================
# Main Dashboard Assembly
# =============================================================================

def create_oceanviz_dashboard():
    """
    Create and configure the complete OceanViz dashboard.

    This function:
    1. Creates the UI layout with all widgets
    2. Initializes the Controller
    3. Attaches all callbacks
    4. Schedules the data load for when the page is ready

    Returns
    -------
    pn.Column
        Complete dashboard layout ready for serving
    """
    logger.info("Creating OceanViz dashboard...")

    layout = create_dashboard(title=TITLE)

    controller = OceanVizController(
        widgets=layout._oceanviz_widgets,
        map_selector=layout._oceanviz_map_selector,
        playback=layout._oceanviz_playback,
        app_config=OceanVizConfig.load_from_file()
    )
    controller.attach_callbacks()

    # Load once the page is rendered so the loading message is visible
    pn.state.onload(controller.load_datasets)

    # Store references for external access
    layout._oceanviz_controller = controller
    layout._oceanviz_state = controller.state

    logger.info("Dashboard created successfully")

    return layout


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    """Main entry point when running as script."""
    logger.info("Starting OceanViz Dashboard Application")

    logger.info("Serving dashboard on http://localhost:5006")
    pn.serve(
        create_oceanviz_dashboard,
        port=5006,
        title=TITLE,
        show=True,
        autoreload=False
    )


if __name__ == '__main__':
    main()
elif __name__.startswith('bokeh'):
    # For panel serve
    create_oceanviz_dashboard().servable(title=TITLE)
