"""
OceanViz Controllers Module

The controller layer keeps the selection state and every view in step.

- ViewSynchronizer: the selection state machine; notifies registered views
  with all redraws before the year update
- OceanVizController: wires Panel widgets to the synchronizer and loads data

Example
-------
>>> from oceanviz.ui import create_dashboard
>>> from oceanviz.controllers import OceanVizController
>>>
>>> layout = create_dashboard()
>>> controller = OceanVizController(
...     widgets=layout._oceanviz_widgets,
...     map_selector=layout._oceanviz_map_selector,
...     playback=layout._oceanviz_playback
... )
>>> controller.attach_callbacks()
"""

from oceanviz.controllers.synchronizer import (
    ViewSynchronizer,
    SelectionSnapshot,
    SelectionObserver
)
from oceanviz.controllers.app_controller import OceanVizController

__all__ = [
    'ViewSynchronizer',
    'SelectionSnapshot',
    'SelectionObserver',
    'OceanVizController'
]
