"""
Year Playback Module

Animates the year slider through the recorded years of the selected region.
Each step sets the slider value, so it goes through the same callback as a
user drag.
"""

import bisect
import logging
from typing import List, Optional, Sequence

import param
import panel as pn

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_MS = 200


# =============================================================================
# Playback Controller
# =============================================================================

class YearPlaybackController(param.Parameterized):
    """
    Play/pause and step controls for the year slider.

    Steps move between recorded years only, so gaps in a series are skipped,
    and wrap around at either end. A single Panel periodic callback drives
    playback; pausing stops it and a speed change updates its period.

    Parameters
    ----------
    year_slider : pn.widgets.IntSlider
        Year slider widget to control
    play_button : pn.widgets.Button
        Play/pause button
    prev_button, next_button : pn.widgets.Button, optional
        Step buttons
    speed_slider : pn.widgets.IntSlider, optional
        Milliseconds between years

    Examples
    --------
    >>> slider = pn.widgets.IntSlider(start=1850, end=2014, value=1850)
    >>> playback = YearPlaybackController(slider, pn.widgets.Button(name='▶'))
    >>> playback.set_years([1850, 1900, 2014])
    >>> playback.step_forward()
    >>> slider.value
    1900
    """

    playing = param.Boolean(default=False, doc="Whether playback is active")
    years = param.List(default=[], item_type=int, doc="Recorded years of the selected region")

    def __init__(
        self,
        year_slider,
        play_button,
        prev_button=None,
        next_button=None,
        speed_slider=None,
        **params
    ):
        super().__init__(**params)

        self.year_slider = year_slider
        self.play_button = play_button
        self.prev_button = prev_button
        self.next_button = next_button
        self.speed_slider = speed_slider

        self._callback: Optional[pn.io.PeriodicCallback] = None

        self.play_button.on_click(self.toggle_play)
        if self.prev_button is not None:
            self.prev_button.on_click(self.step_backward)
        if self.next_button is not None:
            self.next_button.on_click(self.step_forward)
        if self.speed_slider is not None:
            self.speed_slider.param.watch(self._on_speed_change, 'value')

    @property
    def period(self) -> int:
        """Milliseconds between steps."""
        return self.speed_slider.value if self.speed_slider is not None else DEFAULT_PERIOD_MS

    @property
    def _buttons(self) -> List:
        return [b for b in (self.play_button, self.prev_button, self.next_button) if b is not None]

    def set_years(self, years: Sequence[int]) -> None:
        """
        Set the years to step through.

        An empty sequence stops playback and disables the buttons.
        """
        self.years = sorted(int(y) for y in years)
        enabled = bool(self.years)
        if not enabled:
            self.stop()
        for button in self._buttons:
            button.disabled = not enabled
        logger.debug(f"Playback over {len(self.years)} years")

    # =========================================================================
    # Stepping
    # =========================================================================

    def _neighbour(self, step: int) -> Optional[int]:
        """Recorded year ``step`` positions away from the slider value."""
        if not self.years or self.year_slider.disabled:
            return None

        current = self.year_slider.value
        if current in self.years:
            idx = self.years.index(current) + step
        else:
            # Between recorded years: forward lands on the next, backward on the previous
            idx = bisect.bisect_left(self.years, current) + min(step, 0)
        return self.years[idx % len(self.years)]

    def step_forward(self, event=None):
        year = self._neighbour(1)
        if year is not None:
            self.year_slider.value = year

    def step_backward(self, event=None):
        year = self._neighbour(-1)
        if year is not None:
            self.year_slider.value = year

    # =========================================================================
    # Play / Pause
    # =========================================================================

    def toggle_play(self, event=None):
        """
        Start or pause playback.

        Parameters
        ----------
        event : param.Event
            Button click event
        """
        if self.playing:
            self.stop()
            return

        if not self.years or self.year_slider.disabled:
            return

        self.playing = True
        self.play_button.name = '⏸'
        self._callback = pn.state.add_periodic_callback(self._tick, period=self.period)
        logger.debug(f"Playback started ({self.period} ms)")

    def _tick(self):
        if not self.playing:
            return
        if self.year_slider.disabled:
            logger.debug("Year slider disabled, stopping playback")
            self.stop()
            return
        self.step_forward()

    def stop(self):
        """Stop playback and its periodic callback."""
        if self._callback is not None:
            self._callback.stop()
            self._callback = None
        if self.playing:
            logger.debug("Playback stopped")
        self.playing = False
        self.play_button.name = '▶'

    def _on_speed_change(self, event):
        if self._callback is not None:
            self._callback.period = event.new


# =============================================================================
# Convenience Functions
# =============================================================================

def create_playback_controller(
    year_slider,
    play_button,
    prev_button=None,
    next_button=None,
    speed_slider=None
) -> YearPlaybackController:
    """
    Create a YearPlaybackController.

    Returns
    -------
    YearPlaybackController
        Playback controller wired to the given widgets

    Examples
    --------
    >>> from oceanviz.ui.widgets import create_year_slider, create_playback_controls
    >>> controls = create_playback_controls()
    >>> playback = create_playback_controller(
    ...     year_slider=create_year_slider(),
    ...     play_button=controls['play'],
    ...     prev_button=controls['prev'],
    ...     next_button=controls['next'],
    ...     speed_slider=controls['speed']
    ... )
    """
    return YearPlaybackController(
        year_slider=year_slider,
        play_button=play_button,
        prev_button=prev_button,
        next_button=next_button,
        speed_slider=speed_slider
    )
