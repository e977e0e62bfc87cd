import json, argparse, logging, sys

from tsp_solver import TSPSolver, SolverConfig, load_cities, parse_route


def main(argv=None):
    p = argparse.ArgumentParser(description="Solve a TSP instance or measure a given route.")
    p.add_argument("cities", help="CSV (x,y[,name]) or JSON file of cities")
    p.add_argument("--route", default=None,
                   help="comma-separated city indices; prints that route's length instead of solving")
    p.add_argument("--names", action="store_true", help="require and report city names")
    p.add_argument("--exact-threshold", type=int, default=10)
    p.add_argument("--exact-max-cities", type=int, default=15)
    p.add_argument("--starts", type=int, default=5)
    p.add_argument("--json", action="store_true", help="print the result as JSON")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()),
                        format="[%(asctime)s][%(name)s][%(levelname)s]: %(message)s",
                        datefmt="%Y-%m-%d %H:%M:%S")

    try:
        cities = load_cities(args.cities, require_names=args.names)
        cfg = SolverConfig(exact_threshold=args.exact_threshold, exact_max_cities=args.exact_max_cities,
                           n_starts=args.starts)
        solver = TSPSolver(cities, cfg)
        if args.route is not None:
            route = parse_route([int(tok) for tok in args.route.split(",") if tok.strip()], len(cities))
        else:
            route = None
    except ValueError as e:
        p.error(str(e))

    if route is not None:
        distance = solver.route_distance(route)
        if args.json:
            json.dump({"route": route, "total_distance": distance}, sys.stdout, indent=2)
            print()
            return
        print(f"Route: {' -> '.join(map(str, route))} -> {route[0]}")
        print(f"Total distance: {distance:.2f} units")
        for k, i in enumerate(route):
            j = route[(k + 1) % len(route)]
            print(f"{k + 1}. City {i} -> City {j}: {solver.dm.distance(i, j):.2f} units")
        return

    res = solver.solve()
    if args.json:
        out = {"route": res.route, "total_distance": res.total_distance, "method": res.method}
        if args.names:
            out["route_names"] = res.route_names
        json.dump(out, sys.stdout, indent=2)
        print()
    else:
        print(res.summary(named=args.names))


if __name__ == "__main__":
    main()
