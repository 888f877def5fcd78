from tensor_nets.ops import OperatorRegistry, has_cost_function


def check():
    operators = OperatorRegistry.get_all_operators()
    for op_type in sorted(operators):
        cost = "yes" if has_cost_function(op_type) else "no"
        print(f"Op: {op_type} (cost function: {cost})")
        for backend, factory in operators[op_type].items():
            impl = getattr(factory, "keywords", {}).get("kernel", factory)
            print(f"  Backend: {backend.value} -> {impl.__name__}")


if __name__ == "__main__":
    check()
