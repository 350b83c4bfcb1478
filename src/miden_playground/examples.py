"""Sample programs offered by the playground front ends."""
from __future__ import annotations

PRIME_GENERATOR = """use.std::sys

# append the current number to the prime list
proc.append
    # [prime, i, n, primes..]
    dup
    dup.2
    mem_store
    swap.2
    swap
    add.1
end

# push a boolean on whether or not the program should continue
proc.should_continue
    # [i, n, primes..]
    dup.1
    dup.1
    neq
end

# returns two flags: whether the loop should continue and whether the candidate is prime
proc.is_not_prime_should_continue
    # [j, candidate, i, n, primes..]
    dup
    mem_load
    push.0.1

    # a composite number has its smallest prime squared lesser than itself
    dup.2
    dup
    mul
    dup.5
    gt
    if.true
        drop
        drop
        push.1.0
    end

    # check mod only if the loop should continue
    dup
    if.true
        dup.4
        dup.3
        u32assert2 u32mod
        eq.0
        if.true
            drop
            drop
            push.0.0
        end
    end

    swap.2
    drop
    swap
end

# check if the current candidate isn't a prime
proc.is_not_prime
    # [candidate, i, n, primes..]
    push.0
    exec.is_not_prime_should_continue
    while.true
        drop
        add.1
        exec.is_not_prime_should_continue
    end
    swap
    drop
    eq.0
end

# calculate and push the next prime to the stack
proc.next
    # [i, n, primes..]
    dup.2
    add.2
    exec.is_not_prime
    while.true
        add.2
        exec.is_not_prime
    end
    exec.append
end

# expects the desired primes count on top of the stack, e.g. inputs ["50"]
begin
    push.0
    push.2
    exec.append
    push.3
    exec.append
    exec.should_continue
    while.true
        exec.next
        exec.should_continue
    end
    drop
    drop
    exec.sys::truncate_stack
end"""

EXAMPLE_PROGRAMS: list[tuple[str, str]] = [
    ("Basic Addition", "# Adds 3 + 5 = 8\nbegin\n    push.3\n    push.5\n    add\nend"),
    ("Input Stack Demo", '# Adds two inputs: Try with ["10", "20"] → 30\nbegin\n    add\nend'),
    (
        "Fibonacci Numbers",
        "# Computes F(8) using repeat loop\n"
        '# Input: { "operand_stack": ["1"] }\n'
        "begin\n    # This code computes 69th Fibonacci number\n    repeat.68\n        swap dup.1 add\n    end\nend",
    ),
    ("Prime Generator", PRIME_GENERATOR),
    (
        "Conditional Logic",
        "# Keeps larger of 15 and 10 (result: 15)\n"
        "begin\n    push.15\n    push.10\n    dup.1 gt\n    if.true\n        swap\n    end\n    drop\nend",
    ),
    (
        "Memory Operations",
        "# Stores 42 and 100 in memory, sums them (result: 142)\n"
        "begin\n    push.42 push.0 mem_store\n    push.100 push.1 mem_store\n"
        "    push.0 mem_load\n    push.1 mem_load\n    add\nend",
    ),
    (
        "Stack Manipulation",
        "# Leaves [3,3] on the stack\n"
        "begin\n    push.1 push.2 push.3 push.4\n    swap.2\n    drop\n    dup\n    swap.2\n    drop\n    drop\nend",
    ),
    ("Counter with Input", '# Adds 5 to input. Try ["7"] → 12\nbegin\n    push.5\n    add\nend'),
]


def example_programs() -> list[list[str]]:
    """Catalog as JSON-ready ``[name, source]`` pairs."""
    return [[name, source] for name, source in EXAMPLE_PROGRAMS]


__all__ = ["EXAMPLE_PROGRAMS", "example_programs"]
