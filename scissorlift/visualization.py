"""
Visualization Module - Charts and schematic for a scissor lift design.

Views:
1. Forces - actuator and link force vs platform height
2. Efficiency - mechanical efficiency vs platform height
3. Geometry - link angle and base span vs platform height
4. Schematic - side view of the X stage at a chosen angle

Every function draws into a given Axes (or creates one) and returns it,
so the views compose into the dashboard or into a caller's own figure.
"""

from typing import Optional

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle, Circle, Arc

from .geometry import scissor_joints
from .results import GraphCurves, MechanismResult


# Colors
ACTUATOR_COLOR = '#F97316'
ROD_COLOR = '#8B5CF6'
EFFICIENCY_COLOR = '#10B981'
ANGLE_COLOR = '#2E86AB'
SPAN_COLOR = '#E74C3C'
LINK_COLOR = '#10B981'
JOINT_COLOR = '#374151'
PLATFORM_COLOR = '#3B82F6'
BASE_COLOR = '#6B7280'


def _axes(ax: Optional[plt.Axes], figsize=(8, 5)) -> plt.Axes:
    if ax is None:
        _, ax = plt.subplots(figsize=figsize)
    return ax


def plot_forces(curves: GraphCurves, ax: Optional[plt.Axes] = None,
                save_path: Optional[str] = None) -> plt.Axes:
    """Actuator and link force vs platform height."""
    ax = _axes(ax)
    ax.plot(curves.height, curves.actuator_force, color=ACTUATOR_COLOR,
            linewidth=2.5, marker='o', markersize=3, label='Actuator force (N)')
    ax.plot(curves.height, curves.rod_force, color=ROD_COLOR,
            linewidth=2.5, marker='o', markersize=3, label='Link force (N)')
    ax.set_xlabel('Height (mm)')
    ax.set_ylabel('Force (N)')
    ax.set_title('Forces vs Table Height', fontweight='bold')
    ax.set_ylim(bottom=0)
    ax.legend(loc='upper right', fontsize=9)
    ax.grid(True, alpha=0.3)

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')
    return ax


def plot_efficiency(curves: GraphCurves, ax: Optional[plt.Axes] = None,
                    save_path: Optional[str] = None) -> plt.Axes:
    """Mechanical efficiency (%) vs platform height."""
    ax = _axes(ax)
    ax.plot(curves.height, curves.efficiency, color=EFFICIENCY_COLOR, linewidth=2.5)
    ax.fill_between(curves.height, curves.efficiency, color=EFFICIENCY_COLOR, alpha=0.15)
    ax.set_xlabel('Height (mm)')
    ax.set_ylabel('Efficiency (%)')
    ax.set_title('Mechanical Efficiency', fontweight='bold')
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')
    return ax


def plot_geometry(curves: GraphCurves, ax: Optional[plt.Axes] = None,
                  save_path: Optional[str] = None) -> plt.Axes:
    """Link angle and base span vs platform height, on twin y axes."""
    ax = _axes(ax)
    ax.plot(curves.height, curves.angle, color=ANGLE_COLOR, linewidth=2)
    ax.set_xlabel('Height (mm)')
    ax.set_ylabel('Angle (°)', color=ANGLE_COLOR)
    ax.tick_params(axis='y', labelcolor=ANGLE_COLOR)

    ax2 = ax.twinx()
    ax2.plot(curves.height, curves.horizontal_distance, color=SPAN_COLOR,
             linewidth=2, linestyle='--')
    ax2.set_ylabel('Base span (mm)', color=SPAN_COLOR)
    ax2.tick_params(axis='y', labelcolor=SPAN_COLOR)

    ax.set_title('Mechanism Geometry', fontweight='bold')
    ax.grid(True, alpha=0.3)

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')
    return ax


def draw_schematic(rod_length_mm: float, angle_deg: float,
                   ax: Optional[plt.Axes] = None, show_dimensions: bool = True,
                   save_path: Optional[str] = None) -> plt.Axes:
    """
    Side view of one X stage at the given link angle.

    Each arm is two links of length L pinned at the centre, so the
    platform sits at 2L·sinθ and the base pivots are 2L·cosθ apart.
    """
    ax = _axes(ax, figsize=(8, 8))
    L = rod_length_mm
    theta = np.radians(angle_deg)
    j = scissor_joints(L, theta)
    height = j['top_left'][1]
    span = j['base_right'][0] - j['base_left'][0]

    ax.set_aspect('equal')
    ax.set_xlabel('X (mm)')
    ax.set_ylabel('Y (mm)')
    ax.set_title(f'Scissor Lift - θ = {angle_deg:.1f}°', fontweight='bold')
    ax.grid(True, alpha=0.3, linestyle='--')

    # Fixed base
    base_h = 0.08 * L
    ax.add_patch(Rectangle((-0.6 * span - 0.1 * L, -base_h), 1.2 * span + 0.2 * L, base_h,
                           facecolor=BASE_COLOR, edgecolor=JOINT_COLOR, zorder=1))

    # Arms
    for a, b in (('base_left', 'top_right'), ('base_right', 'top_left')):
        ax.plot([j[a][0], j[b][0]], [j[a][1], j[b][1]], color=LINK_COLOR,
                linewidth=6, solid_capstyle='round', zorder=3)

    # Platform
    plat_w = max(span * 1.2, 0.6 * L)
    plat_h = 0.06 * L
    ax.add_patch(Rectangle((-plat_w / 2, height), plat_w, plat_h,
                           facecolor=PLATFORM_COLOR, edgecolor='#1E40AF',
                           linewidth=2, zorder=4))

    # Actuator between the base pivots
    ax.plot([j['base_left'][0], j['base_right'][0]], [0.25 * base_h, 0.25 * base_h],
            color=ACTUATOR_COLOR, linewidth=4, alpha=0.8, zorder=2)

    # Joints
    for name, p in j.items():
        size = 0.05 * L if name != 'centre' else 0.04 * L
        ax.add_patch(Circle(p, size, facecolor=JOINT_COLOR, zorder=5))
        ax.add_patch(Circle(p, size * 0.6, facecolor='#9CA3AF', zorder=6))

    if show_dimensions:
        x_dim = j['base_right'][0] + 0.35 * L
        ax.annotate('', xy=(x_dim, 0), xytext=(x_dim, height),
                    arrowprops=dict(arrowstyle='<->', color='black'))
        ax.text(x_dim + 0.05 * L, height / 2, f'h = {height:.1f} mm', va='center', fontsize=9)

        ax.annotate('', xy=(j['base_left'][0], -2 * base_h), xytext=(j['base_right'][0], -2 * base_h),
                    arrowprops=dict(arrowstyle='<->', color='black'))
        ax.text(0, -3.2 * base_h, f'x = {span:.1f} mm', ha='center', fontsize=9)

        mid = (j['base_left'] + j['centre']) / 2
        ax.text(mid[0] - 0.1 * L, mid[1] + 0.05 * L, f'L = {L:.1f} mm', fontsize=9,
                rotation=angle_deg, ha='center', color=LINK_COLOR)

        ax.add_patch(Arc(j['base_left'], 0.5 * L, 0.5 * L, theta1=0, theta2=angle_deg,
                         color=SPAN_COLOR, linewidth=1.5))
        ax.text(j['base_left'][0] + 0.3 * L, 0.05 * L, f'θ = {angle_deg:.1f}°',
                fontsize=9, color=SPAN_COLOR)

    margin = 0.5 * L
    ax.set_xlim(-span / 2 - margin, span / 2 + margin + 0.4 * L)
    ax.set_ylim(-4 * base_h - 0.1 * L, height + plat_h + margin)

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')
    return ax


def create_dashboard(result: MechanismResult, curves: GraphCurves,
                     save_path: Optional[str] = None) -> plt.Figure:
    """2×2 figure: forces, efficiency, geometry, schematic at minimum angle."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 11))

    plot_forces(curves, ax=axes[0, 0])
    plot_efficiency(curves, ax=axes[0, 1])
    plot_geometry(curves, ax=axes[1, 0])
    draw_schematic(result.rod_length_mm, result.theta_min_deg, ax=axes[1, 1])

    status = 'SAFE' if result.is_safe else 'NOT SAFE'
    fig.suptitle(f'L = {result.rod_length_mm:.1f} mm   '
                 f'FS buckling = {result.buckling_safety_factor:.1f} ({status})   '
                 f'T = {result.screw_torque_mnm:.1f} mN·m',
                 fontsize=13, fontweight='bold')
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
    return fig
