from rich import print
from rich.pretty import pprint

from cmdline import *

definition = (
    define("sizer")
    .with_option(("-m", "--maxSize"), "max file size in KB", "size", "1024")
    .with_option(("-v", "--verbose"), "verbose")
    .with_parameters("file", "The output files")
    .build()
)


if __name__ == '__main__':
    try:
        result = definition.parse()
    except ParsingError as fault:
        trigger(fault, shell=True)
    else:
        pprint(result)
        if result.has_option("-v"):
            print(definition)
        print(result.try_parse_option("--maxSize", int, 1024))
