import argparse
import logging

from gridclamp import constants
from gridclamp.generator import main
from gridclamp.models import CellStyle, GridConfig


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compute per-row line clamps for a two-column card grid")
    parser.add_argument("csv_file", help="Path to the CSV file with one card per row")
    parser.add_argument("output_csv", nargs="?", default=None, help="Path to the output clamp table (default: output/<name>_clamps.csv)")
    parser.add_argument("--text-column", default=None, help="Column holding card text. Default: first of text/content/markdown/body/description")
    parser.add_argument("--height-budget", type=float, default=constants.HEIGHT_BUDGET, help="Total height available to the grid")
    parser.add_argument("--min-row-height", type=float, default=constants.MIN_ROW_HEIGHT, help="Readability floor: minimum height of every row")
    parser.add_argument("--columns", type=int, default=constants.COLUMNS_PER_ROW, help="Cards per grid row")
    parser.add_argument("--max-iterations", type=int, default=constants.MAX_ITERATIONS, help="Cap on single-line allocation attempts when the grid does not fit")
    parser.add_argument("--grid-width", type=float, default=constants.GRID_WIDTH, help="Width of the whole grid; cells share it equally")
    parser.add_argument("--font", default="Helvetica", help="Font name (built-in, registered, or <name>.ttf on the font path)")
    parser.add_argument("--font-size", type=float, default=constants.FONT_SIZE)
    parser.add_argument("--line-height", default=None, help="Line height: absolute (18pt), multiplier (1.4), percent (140%%) or 'normal'")
    parser.add_argument("--padding-y", type=float, default=constants.PADDING_VERTICAL, help="Top and bottom padding of each cell")
    parser.add_argument("--padding-x", type=float, default=constants.PADDING_HORIZONTAL, help="Left and right padding of each cell")
    parser.add_argument("--margin-y", type=float, default=0.0, help="Top and bottom margin of each cell")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log allocation details")
    args = parser.parse_args()

    # configure basic logging to console so users are kept up-to-date
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")
    main(
        args.csv_file,
        args.output_csv,
        text_column=args.text_column,
        grid_width=args.grid_width,
        config=GridConfig(
            min_row_height=args.min_row_height,
            height_budget=args.height_budget,
            columns_per_row=args.columns,
            max_iterations=args.max_iterations,
        ),
        style=CellStyle(
            font_name=args.font,
            font_size=args.font_size,
            line_height=args.line_height,
            padding_top=args.padding_y,
            padding_bottom=args.padding_y,
            padding_left=args.padding_x,
            padding_right=args.padding_x,
            margin_top=args.margin_y,
            margin_bottom=args.margin_y,
        ),
    )
