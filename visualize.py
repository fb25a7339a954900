import os, argparse, tempfile, shutil, logging
import matplotlib.pyplot as plt
import imageio

from aco_tsp import TSPInstance, ACOConfig, Colony

ANT_COLOR = (100 / 255, 200 / 255, 1.0, 0.4)


def tour_to_xy(coords, tour, closed=True):
    xs = [coords[i][0] for i in tour]
    ys = [coords[i][1] for i in tour]
    if closed:
        xs.append(coords[tour[0]][0])
        ys.append(coords[tour[0]][1])
    return xs, ys


def draw_frame(colony, show_all, frame_path):
    coords = colony.instance.coords
    fig, ax = plt.subplots(figsize=(6, 6))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    if show_all:
        for path in colony.partial_tours():
            if len(path) < 2:
                continue
            xs, ys = tour_to_xy(coords, path, closed=len(path) == colony.n)
            ax.plot(xs, ys, "-", color=ANT_COLOR, linewidth=1)

    best = colony.best_tour
    if best is not None and len(best) > 1:
        xs, ys = tour_to_xy(coords, best)
        # yellow while every ant is still drawn, red afterwards
        ax.plot(xs, ys, "-", color="yellow" if show_all else "red", linewidth=2)

    ax.plot([c[0] for c in coords], [c[1] for c in coords], "o", color="white", markersize=4)
    ax.set_title(colony.status_line(), color="white", pad=10)
    ax.set_aspect("equal", adjustable="box")
    ax.set_xticks([])
    ax.set_yticks([])
    fig.savefig(frame_path, dpi=100, facecolor=fig.get_facecolor())
    plt.close(fig)


def animate(colony, save_gif, n_cycles, steps_per_frame=2, frame_every=1, frames_dir=None, keep_frames=False):
    """Drive the colony one render tick at a time and assemble a GIF.

    Every tick calls `step(steps_per_frame)`; every `frame_every`-th tick is
    rendered. In-progress ant paths are drawn until the first cycle ends.
    """
    tmpdir_was_auto = False
    if frames_dir is None:
        frames_dir = tempfile.mkdtemp(prefix="aco_frames_")
        tmpdir_was_auto = True
    else:
        os.makedirs(frames_dir, exist_ok=True)

    frames = []
    show_all = True
    tick = 0
    while colony.cycle < n_cycles:
        colony.step(steps_per_frame)
        if colony.stalled:
            print("Colony stalled at", colony.status_line())
            break
        if colony.cycle > 0 and colony.best_tour is not None:
            show_all = False
        if tick % frame_every == 0 or colony.cursor == 0:
            frame_path = os.path.join(frames_dir, f"frame_{len(frames):05d}.png")
            draw_frame(colony, show_all, frame_path)
            frames.append(frame_path)
        tick += 1

    d = os.path.dirname(save_gif)
    if d:
        os.makedirs(d, exist_ok=True)
    with imageio.get_writer(save_gif, mode="I", duration=0.05) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))

    if not keep_frames and tmpdir_was_auto:
        shutil.rmtree(frames_dir, ignore_errors=True)
    elif keep_frames:
        print("Frames saved in:", frames_dir)
    return frames


def draw_heatmap(colony, save_path):
    """Pheromone matrix as an image, one row and column per city."""
    tau = colony.pheromone.to_numpy()
    fig, ax = plt.subplots(figsize=(5, 4))
    im = ax.imshow(tau, cmap="viridis", interpolation="nearest")
    ax.set_title(f"Pheromone after cycle {colony.cycle}")
    ax.set_xlabel("City")
    ax.set_ylabel("City")
    fig.colorbar(im, ax=ax)
    d = os.path.dirname(save_path)
    if d:
        os.makedirs(d, exist_ok=True)
    fig.savefig(save_path, dpi=120, bbox_inches="tight")
    plt.close(fig)


def build_instance(args):
    if args.csv:
        return TSPInstance.from_csv(args.csv)
    n = max(2, min(100, args.n))
    return TSPInstance.random_euclidean(n=n, seed=args.seed, width=args.width, height=args.height,
                                        margin=10.0, name=f"viz{n}")


def build_argparser():
    p = argparse.ArgumentParser()
    p.add_argument("--csv", default=None, help="x,y city file (overrides --n)")
    p.add_argument("--n", type=int, default=12, help="number of cities (2..100)")
    p.add_argument("--cycles", type=int, default=3)
    p.add_argument("--ants", type=int, default=None)
    p.add_argument("--width", type=float, default=800.0)
    p.add_argument("--height", type=float, default=600.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--steps-per-frame", type=int, default=2)
    p.add_argument("--frame-every", type=int, default=10, help="render every k-th tick")
    p.add_argument("--outdir", default="viz")
    p.add_argument("--keep-frames", action="store_true")
    p.add_argument("--heatmap", action="store_true", help="also save the final pheromone matrix as an image")
    p.add_argument("--verbose", action="store_true")
    return p


def main(argv=None):
    p = build_argparser()
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        inst = build_instance(args)
    except ValueError as e:
        p.error(str(e))
    colony = Colony(inst, ACOConfig(n_ants=args.ants, seed=args.seed))
    gif_path = os.path.join(args.outdir, "colony.gif")
    frames_dir = os.path.join(args.outdir, "frames") if args.keep_frames else None
    animate(colony, gif_path, args.cycles, steps_per_frame=args.steps_per_frame,
            frame_every=args.frame_every, frames_dir=frames_dir, keep_frames=args.keep_frames)
    print("Saved:", gif_path)
    if args.heatmap:
        heat_path = os.path.join(args.outdir, "pheromone.png")
        draw_heatmap(colony, heat_path)
        print("Saved:", heat_path)
    print(colony.status_line())

if __name__ == "__main__":
    main()
