"""
Liftoff Telemetry Replay - Plotting

Renders flight logs and the reconstructed profile with matplotlib (Agg
backend, files only).
"""

import logging
import math
import os
from typing import List, Optional, Sequence

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt

from .profile import FlightProfile

logger = logging.getLogger(__name__)

PANEL_TITLES = ('Trajectory', 'Speed', 'Acceleration', 'Jerk')
PANEL_LABELS = (
    ('Downrange (km)', 'Altitude (km)'),
    ('Time (s)', 'Speed (m/s)'),
    ('Time (s)', '|a| (m/s²)'),
    ('Time (s)', '|j| (m/s³)'),
)
EVENT_NAMES = ('MECO', 'SES', 'SECO')


def configure_plot_style() -> None:
    """Plot defaults shared by all figures."""
    plt.rcParams.update({
        'figure.figsize': (12, 8),
        'savefig.dpi': 150,
        'axes.grid': True,
        'axes.axisbelow': True,
        'grid.alpha': 0.3,
        'font.size': 10,
        'axes.titlesize': 12,
        'legend.fontsize': 9,
        'lines.linewidth': 1.6,
        'xtick.direction': 'in',
        'ytick.direction': 'in',
    })


def plot_flight_log(log, output_dir: str, name: str = 'flight',
                    title: Optional[str] = None) -> str:
    """
    Four-panel plot of a FlightLog: trajectory, speed, |a| and |j|.

    Args:
        log: FlightLog (anything with as_matrix())
        output_dir: Directory to save the plot
        name: File stem
        title: Figure title

    Returns:
        Path to saved plot file
    """
    data = log.as_matrix()
    fig, axes = plt.subplots(2, 2)

    for k, ax in enumerate(axes.flat):
        x = data[:, k, 0]
        y = data[:, k, 1]
        if k == 0:
            x = x / 1000.0
            y = y / 1000.0
        ax.plot(x, y, 'b-')
        ax.set_title(PANEL_TITLES[k], fontweight='bold')
        ax.set_xlabel(PANEL_LABELS[k][0])
        ax.set_ylabel(PANEL_LABELS[k][1])

    if title:
        fig.suptitle(title, fontweight='bold')
    plt.tight_layout()
    path = os.path.join(output_dir, f'{name}.png')
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)

    return path


def plot_profile_reconstruction(raw: FlightProfile, fitted: FlightProfile,
                                events: Sequence[float], output_dir: str) -> str:
    """
    Raw telemetry against the reconstructed profile, with event markers.

    Returns:
        Path to saved plot file
    """
    fig, (ax_alt, ax_vel) = plt.subplots(2, 1, sharex=True)

    raw_t, raw_alt = raw.altitude.to_arrays()
    fit_t, fit_alt = fitted.altitude.to_arrays()
    ax_alt.plot(fit_t, fit_alt / 1000.0, 'b-', label='Reconstructed')
    ax_alt.scatter(raw_t, raw_alt / 1000.0, c='gray', s=8, label='Telemetry')
    ax_alt.set_ylabel('Altitude (km)')

    raw_t, raw_vel = raw.velocity.to_arrays()
    fit_t, fit_vel = fitted.velocity.to_arrays()
    ax_vel.plot(fit_t, fit_vel, 'b-', label='Reconstructed')
    ax_vel.scatter(raw_t, raw_vel, c='gray', s=8, label='Telemetry')
    ax_vel.set_ylabel('Velocity (m/s)')
    ax_vel.set_xlabel('Time (s)')

    for name, t in zip(EVENT_NAMES, events):
        if math.isinf(t):
            continue
        for ax in (ax_alt, ax_vel):
            ax.axvline(t, color='red', linestyle='--', alpha=0.6)
        ax_vel.annotate(name, (t, 0), xytext=(3, 3), textcoords='offset points',
                        fontsize=8, color='red')

    ax_alt.legend(loc='upper left')
    ax_alt.set_title('Profile Reconstruction', fontweight='bold')
    plt.tight_layout()
    path = os.path.join(output_dir, 'profile_reconstruction.png')
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)

    return path


def generate_all_plots(result, output_dir: str = "plots") -> List[str]:
    """
    Generate every plot for a MissionResult.

    Args:
        result: MissionResult from run_mission
        output_dir: Directory to save plots (created if missing)

    Returns:
        List of paths to saved plot files
    """
    os.makedirs(output_dir, exist_ok=True)
    configure_plot_style()

    saved = []
    if len(result.replay_log) > 0:
        saved.append(plot_flight_log(result.replay_log, output_dir,
                                     'telemetry_replay', 'Telemetry Replay'))
    if len(result.rocket_log) > 0:
        saved.append(plot_flight_log(result.rocket_log, output_dir,
                                     'rocket_model', 'Rocket Model'))
    if not result.fitted.is_empty():
        saved.append(plot_profile_reconstruction(result.raw, result.fitted,
                                                 result.events, output_dir))

    logger.info(f"Saved {len(saved)} plots to {output_dir}")
    return saved
