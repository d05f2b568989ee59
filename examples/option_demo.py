from cmdline import CmdLineParser, Option, ParseError

parser = CmdLineParser(allow_abbreviations=True)
parser.add_option("-v", "--verbose", description="Chatty output")
parser.add_option("-p", "--port", nargs=1)
parser.add_option("--tags", nargs="+", separator=",")
parser.add_group(Option("json"), Option("xml"), required=True, name="format")

for tokens in (
    ["--json", "--port", "8080", "--tags=a,b,c", "-v", "notes.txt"],
    ["--xml", "--tags", "x", "y"],
    ["--json", "--xml"],
    ["--port"],
):
    try:
        parsed = parser.parse(tokens)
    except ParseError as error:
        print(f"{tokens}: {error}")
        continue
    parsed.summary()
    print("port:", parsed.get_as("port", int, default=80))
