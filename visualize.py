import os, argparse, logging, tempfile, shutil
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import imageio

from tsp_solver import (TSPInstance, SolverConfig, TSPSolver, TwoOptHistory, DistanceMatrix,
                        InvalidInputError, load_cities, nearest_neighbor, two_opt)
from tsp_solver.tsp import as_cities

STYLES = {
    "modern":   {"background": "#ffffff", "city": "#ef4444", "city_edge": "#dc2626", "route": "#3b82f6", "text": "#1f2937", "subtitle": "#6b7280"},
    "minimal":  {"background": "#ffffff", "city": "#6b7280", "city_edge": "#4b5563", "route": "#374151", "text": "#111827", "subtitle": "#6b7280"},
    "colorful": {"background": "#f0f9ff", "city": "#f59e0b", "city_edge": "#d97706", "route": "#8b5cf6", "text": "#1e40af", "subtitle": "#3730a3"},
    "dark":     {"background": "#1a1a1a", "city": "#ef4444", "city_edge": "#dc2626", "route": "#3b82f6", "text": "#ffffff", "subtitle": "#d1d5db"},
}


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def draw_route(ax, cities, route, title, subtitle=None, style="modern", show_labels=True):
    colors = STYLES[style]
    ax.set_facecolor(colors["background"])
    if len(route) > 1:
        xs = [cities[i].x for i in route] + [cities[route[0]].x]
        ys = [cities[i].y for i in route] + [cities[route[0]].y]
        ax.plot(xs, ys, "-", color=colors["route"], linewidth=2.5, solid_capstyle="round", zorder=1)
    ax.scatter([c.x for c in cities], [c.y for c in cities], s=160, color=colors["city"],
               edgecolors=colors["city_edge"], linewidths=2, zorder=2)
    for c in cities:
        ax.annotate(str(c.id), (c.x, c.y), ha="center", va="center", color="#ffffff",
                    fontsize=7, fontweight="bold", zorder=3)
        if show_labels and c.name:
            ax.annotate(c.name, (c.x, c.y), xytext=(0, 12), textcoords="offset points",
                        ha="center", va="bottom", color=colors["text"], fontsize=9, fontweight="bold")
    if subtitle:
        title = f"{title}\n{subtitle}"
    ax.set_title(title, color=colors["text"], pad=10)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_xticks([])
    ax.set_yticks([])


def render_route(cities, route, total_distance, save_path, style="modern", show_labels=True,
                 show_distance=True, width=800, height=600, dpi=100):
    """Save a PNG of the closed tour. Returns the path written."""
    if style not in STYLES:
        raise ValueError(f"Unknown style {style!r}; choose from {sorted(STYLES)}")
    cities = as_cities(cities)
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    fig.patch.set_facecolor(STYLES[style]["background"])
    ax = plt.gca()
    subtitle = f"{len(cities)} cities, {total_distance:.2f} units total distance" if show_distance else None
    draw_route(ax, cities, route, "TSP Route Visualization", subtitle, style=style, show_labels=show_labels)
    fig.tight_layout()
    ensure(save_path)
    fig.savefig(save_path, dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    return save_path


def make_two_opt_gif(cities, save_gif, start=0, cfg=None, step=1, frames_dir=None, keep_frames=False):
    """Animate 2-opt improving a nearest-neighbor tour. Returns the number of frames written."""
    if step < 1:
        raise ValueError(f"step must be >= 1, got {step}")
    cfg = cfg or SolverConfig()
    cities = as_cities(cities)
    dm = DistanceMatrix(cities)
    history = TwoOptHistory()
    two_opt(dm, nearest_neighbor(dm, start), min_improvement=cfg.min_improvement,
            max_passes=cfg.max_passes, history=history)

    tmpdir_was_auto = False
    if frames_dir is None:
        frames_dir = tempfile.mkdtemp(prefix="two_opt_frames_")
        tmpdir_was_auto = True
    else:
        os.makedirs(frames_dir, exist_ok=True)

    frames = []
    iters = list(range(0, len(history.tours), step))
    if iters[-1] != len(history.tours) - 1:
        iters.append(len(history.tours) - 1)  # always end on the local optimum
    for it in iters:
        fig = plt.figure(figsize=(5, 5))
        draw_route(plt.gca(), cities, history.tours[it], "2-opt",
                   f"move={it}/{len(history.tours) - 1}  length={history.lengths[it]:.2f}", show_labels=False)
        fig.tight_layout()
        frame_path = os.path.join(frames_dir, f"two_opt_{it:04d}.png")
        fig.savefig(frame_path, dpi=100)
        plt.close(fig)
        frames.append(frame_path)

    ensure(save_gif)
    with imageio.get_writer(save_gif, mode="I", duration=0.6) as w:
        for fp in frames:
            w.append_data(imageio.v2.imread(fp))

    if not keep_frames and tmpdir_was_auto:
        shutil.rmtree(frames_dir, ignore_errors=True)
    elif keep_frames:
        print("Frames saved in:", frames_dir)
    return len(frames)


def main():
    p = argparse.ArgumentParser(description="Render a solved tour to PNG (and optionally a 2-opt GIF).")
    p.add_argument("--cities", default=None, help="CSV or JSON file of cities; random instance if omitted")
    p.add_argument("--n", type=int, default=30, help="number of random cities")
    p.add_argument("--square", type=float, default=100.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--style", choices=sorted(STYLES), default="modern")
    p.add_argument("--no-labels", action="store_true")
    p.add_argument("--no-distance", action="store_true")
    p.add_argument("--width", type=int, default=800)
    p.add_argument("--height", type=int, default=600)
    p.add_argument("--outdir", default="visualizations")
    p.add_argument("--gif", action="store_true", help="also save a GIF of 2-opt from city 0")
    p.add_argument("--step", type=int, default=1, help="frame every k accepted moves")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()
    if args.step < 1:
        p.error("--step must be >= 1")

    logging.basicConfig(level=getattr(logging, args.log_level.upper()),
                        format="[%(asctime)s][%(name)s][%(levelname)s]: %(message)s",
                        datefmt="%Y-%m-%d %H:%M:%S")

    if args.cities:
        try:
            cities = load_cities(args.cities)
        except InvalidInputError as e:
            p.error(str(e))
        tag = os.path.splitext(os.path.basename(args.cities))[0]
    else:
        inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
        cities, tag = inst.cities(), inst.name

    res = TSPSolver(cities).solve()
    png = render_route(res.cities, res.route, res.total_distance, os.path.join(args.outdir, f"{tag}_{args.style}.png"),
                       style=args.style, show_labels=not args.no_labels, show_distance=not args.no_distance,
                       width=args.width, height=args.height)
    print(res.summary(named=any(c.name for c in res.cities)))
    print("Saved:", png)

    if args.gif:
        gif_path = os.path.join(args.outdir, f"{tag}_two_opt.gif")
        make_two_opt_gif(res.cities, gif_path, step=args.step)
        print("Saved:", gif_path)

if __name__ == "__main__":
    main()
