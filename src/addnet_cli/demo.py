import argparse

from addnet_core.builder import addition_records, construct_add
from addnet_core.edits import NetworkSession, decrement_ops, increment_ops
from addnet_core.config import DriverConfig, driver_config_from_env
from addnet_core.graph import NodeRecord
from addnet_core.ids import SequentialIdGenerator, UuidIdGenerator
from addnet_core.modes import coerce_validate_mode


def format_delta_line(rec: NodeRecord, diff: int) -> str:
    return f"Output: ({rec.address!r}, {rec.node!r}, {diff:+d})"


def print_delta(revision, delta):
    for rec, diff in delta:
        print(format_delta_line(rec, diff))


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Add two unary numbers with an incremental interaction net."
    )
    parser.add_argument("--left", type=int, default=3, help="left operand")
    parser.add_argument("--right", type=int, default=4, help="right operand")
    parser.add_argument(
        "--output-id", type=int, default=0, help="id the sum is decoded from"
    )
    parser.add_argument(
        "--sequential-ids",
        action="store_true",
        help="use small deterministic ids instead of uuid4",
    )
    parser.add_argument(
        "--validate-mode",
        default=None,
        help="none|strict (default: ADDNET_VALIDATE_MODE or none)",
    )
    parser.add_argument(
        "--max-steps", type=int, default=None, help="pass budget per revision"
    )
    return parser.parse_args(argv)


def run_demo(
    left: int,
    right: int,
    *,
    output_id: int = 0,
    id_gen=None,
    cfg: DriverConfig | None = None,
    sink=print_delta,
):
    """Build left + right, then decrement left and increment right.

    Returns the decoded sum after each revision.
    """
    id_gen = id_gen or UuidIdGenerator()
    output_id = id_gen.reserve(output_id)
    nat1, nat2, adder = construct_add(left, right, output_id, id_gen=id_gen)
    session = NetworkSession(cfg=cfg, sinks=[sink])
    sums = []

    print(f"Adding {left} to {right}")
    print("Each output line is a diff; the last element is the change in multiplicity")
    print("Fully reduced network:")
    session.load(addition_records(nat1, nat2, adder))
    sums.append(session.decode(output_id))
    print(f"Decoded sum: {sums[-1]}")

    if left > 0:
        print()
        print("Decrementing left operand...")
        print("Change in fully reduced network:")
        session.apply_batch(decrement_ops(nat1[0], nat1[1]))
        sums.append(session.decode(output_id))
        print(f"Decoded sum: {sums[-1]}")

    print()
    print("Incrementing right operand...")
    print("Change in fully reduced network:")
    session.apply_batch(increment_ops(nat2[0], id_gen.generate()))
    sums.append(session.decode(output_id))
    print(f"Decoded sum: {sums[-1]}")
    return sums


def main(argv=None):
    args = _parse_args(argv)
    env_cfg = driver_config_from_env()
    cfg = DriverConfig(
        max_steps=args.max_steps if args.max_steps is not None else env_cfg.max_steps,
        validate_mode=(
            coerce_validate_mode(args.validate_mode, context="cli")
            if args.validate_mode is not None
            else env_cfg.validate_mode
        ),
    )
    if args.sequential_ids:
        # Node ids count up from just past the reserved output id.
        id_gen = SequentialIdGenerator(start=args.output_id + 1)
    else:
        id_gen = UuidIdGenerator()
    run_demo(args.left, args.right, output_id=args.output_id, id_gen=id_gen, cfg=cfg)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
