import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import io
import base64
import logging

from utils.constants import ASSET_COLORS, CHART_CONFIG

logger = logging.getLogger(__name__)


class ChartService:
    """Service for rendering dashboard charts as base64 PNG images"""

    @staticmethod
    def render_asset_chart(rows, assets, mode='range'):
        """Line chart of normalized asset rows (one line per asset)"""
        if not rows:
            return None
        try:
            fig, ax = plt.subplots(figsize=CHART_CONFIG['default_figsize'])
            dates = [r['date'] for r in rows]

            for asset in assets:
                points = [(i, r[asset]) for i, r in enumerate(rows) if asset in r]
                if not points:
                    continue
                xs, ys = zip(*points)
                ax.plot(xs, ys, label=asset, linewidth=2, color=ASSET_COLORS.get(asset))

            title = 'Asset Cycle (% of window range)' if mode == 'range' else 'Asset Cycle (% change)'
            ax.set_title(title, fontsize=13, fontweight='bold')
            ax.yaxis.set_major_formatter(FuncFormatter(lambda y, _: f'{y:.0f}%'))
            ChartService._style_axes(ax, dates)
            return ChartService._convert_plot_to_base64(fig)
        except Exception as e:
            logger.error(f"Error rendering asset chart: {e}")
            plt.close('all')
            return None

    @staticmethod
    def render_correlation_chart(points, asset_a, asset_b):
        """Line chart of a correlation series on a fixed [-1, 1] axis"""
        if not points:
            return None
        try:
            fig, ax = plt.subplots(figsize=CHART_CONFIG['default_figsize'])
            dates = [p['date'] for p in points]
            ax.plot(range(len(points)), [p["correlation"] for p in points],
                    color='#6366F1', linewidth=2, label=f'{asset_a} vs {asset_b}')
            ax.axhline(y=0, color='gray', linestyle=':', linewidth=1.5, alpha=0.6)
            ax.set_ylim(-1, 1)
            ax.yaxis.set_major_formatter(FuncFormatter(lambda y, _: f'{y:.2f}'))
            ax.set_title('Correlation Cycle', fontsize=13, fontweight='bold')
            ChartService._style_axes(ax, dates)
            return ChartService._convert_plot_to_base64(fig)
        except Exception as e:
            logger.error(f"Error rendering correlation chart: {e}")
            plt.close('all')
            return None

    @staticmethod
    def _style_axes(ax, dates):
        # Keep roughly ten date labels whatever the window size
        step = max(1, len(dates) // 10)
        positions = list(range(0, len(dates), step))
        ax.set_xticks(positions)
        ax.set_xticklabels([dates[i] for i in positions])
        ax.tick_params(axis='x', rotation=45, labelsize=8)
        ax.grid(True, alpha=0.3, linestyle='--')
        ax.legend(loc='best', fontsize=9, framealpha=0.9)

    @staticmethod
    def _convert_plot_to_base64(fig):
        """Convert matplotlib figure to base64 string"""
        try:
            buffer = io.BytesIO()
            fig.savefig(buffer, format=CHART_CONFIG['format'], dpi=CHART_CONFIG['dpi'],
                        bbox_inches=CHART_CONFIG['bbox_inches'])
            buffer.seek(0)
            plot_data = buffer.getvalue()
            buffer.close()
            plt.close(fig)

            return base64.b64encode(plot_data).decode()
        except Exception as e:
            logger.error(f"Error converting plot to base64: {e}")
            plt.close(fig)
            return None
