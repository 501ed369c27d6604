"""Named example programs that can be run by name from the command line."""

from typing import List

PROGRAMS = {
    "hello_world": (
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
        ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
    ),

    "add_two_and_five": """++       Cell c0 = 2
> +++++  Cell c1 = 5
[        Start your loops with your cell pointer on the loop counter (c1 in our case)
< +      Add 1 to c0
> -      Subtract 1 from c1
]
""",

    # Prints "8 bit cells" on an interpreter whose cells wrap at 256
    "cell_size": """Calculate the value 256 and test if it's zero
If the interpreter errors on overflow this is where it'll happen
++++++++[>++++++++<-]>[<++++>-]
+<[>-<
    Not zero so multiply by 256 again to get 65536
    [>++++<-]>[<++++++++>-]<[>++++++++<-]
    +>[>
        # Print "32"
        ++++++++++[>+++++<-]>+.-.[-]<
    <[-]<->] <[>>
        # Print "16"
        +++++++[>+++++++<-]>.+++++.[-]<
<<-]] >[>
    # Print "8"
    ++++++++[>+++++++<-]>.[-]<
<-]<
# Print " bit cells\\n"
+++++++++++[>+++>+++++++++>+++++++++>+<<<<-]>-.>-.+++++++.+++++++++++.<.
>>.++.+++++++..<-.>>-
Clean up used cells.
[[-]<]""",
}


def list_programs() -> List[str]:
    return sorted(PROGRAMS)


def get_program(name: str) -> str:
    """Look up a program by name."""
    try:
        return PROGRAMS[name]
    except KeyError:
        raise KeyError(f"Unknown program '{name}'. Available programs: {', '.join(list_programs())}") from None
