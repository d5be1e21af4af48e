
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .ants import ACOParams, AntSystem
from .cities import CityFactory, CityMap
from .errors import InsufficientCities, InvalidInput


def build_argparser() -> argparse.ArgumentParser:
    '''Создаёт парсер аргументов командной строки'''
    p = argparse.ArgumentParser(
        prog="ant-system-tsp",
        description="Ant System для евклидовой TSP: города из CSV (x,y) или случайные точки на поле.",
    )
    src = p.add_argument_group("Источник городов")
    src.add_argument("--csv", type=str, help="Путь к CSV с координатами городов (x,y по строкам)", default=None)

    rnd = p.add_argument_group("Случайные города")
    rnd.add_argument("--n", type=int, default=12, help="Количество городов (если не задан --csv)")
    rnd.add_argument("--width", type=float, default=800.0, help="Ширина поля")
    rnd.add_argument("--height", type=float, default=600.0, help="Высота поля")
    rnd.add_argument("--pad", type=float, default=32.0, help="Отступ от края поля")
    rnd.add_argument("--seed", type=int, default=None, help="Seed для воспроизводимости")

    aco = p.add_argument_group("Параметры Ant System")
    aco.add_argument("--alpha", type=float, default=1.0, help="Влияние феромона")
    aco.add_argument("--beta", type=float, default=2.0, help="Влияние эвристики 1/d")
    aco.add_argument("--rho", type=float, default=0.5, help="Испарение (0..1)")
    aco.add_argument("--ants", type=int, default=10, help="Количество муравьёв")
    aco.add_argument("--iters", type=int, default=200, help="Число итераций")
    aco.add_argument("--early-stop", type=int, default=None, help="Ранний стоп после N итераций без улучшения")

    out = p.add_argument_group("Вывод")
    out.add_argument("--verbose", action="store_true", help="Печатать ход первых и последних итераций")
    out.add_argument("--save-cities", type=str, default=None, help="Сохраняет города в CSV")
    out.add_argument("--save-best", type=str, default=None, help="Сохраняет лучший тур в файл (txt)")

    return p


def main(argv: list[str] | None = None) -> int:
    '''Точка входа для ant-system-tsp'''
    parser = build_argparser()
    args = parser.parse_args(argv)

    try:
        # Построение набора городов
        if args.csv:
            cities = CityMap.from_csv(args.csv)
        else:
            cities = CityFactory.random_uniform(args.n, width=args.width, height=args.height,
                                               pad=args.pad, seed=args.seed)
        params = ACOParams(alpha=args.alpha, beta=args.beta, rho=args.rho, ants=args.ants)
        engine = AntSystem(cities, seed=args.seed)
        res = engine.run(params, args.iters, early_stop=args.early_stop, verbose=args.verbose)
    except InvalidInput as exc:
        parser.error(str(exc))
    except InsufficientCities as exc:
        print(f"{exc} Добавьте города.", file=sys.stderr)
        return 2

    if args.save_cities:
        cities.to_csv(args.save_cities)
        print("Города сохранены:", args.save_cities)

    if not res.best_tour:
        print("\nТур не построен (ants=0 или iters=0).")
        return 0

    print("\nЛучший маршрут:", " -> ".join(map(str, res.best_tour)))
    print(f"Длина: {res.best_length:.4f}")
    print("Итераций:", res.iterations)

    if args.save_best:
        Path(args.save_best).write_text(" ".join(map(str, res.best_tour)), encoding="utf-8")
        print("Сохранено:", args.save_best)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
