from iTestGen import __version__


class HelpInfo:
    '''
    One entry of the help message
    '''

    def __init__(self, abbreviation: str, fullName: str, usage: str, alternative: bool = True):
        '''
        :param abbreviation: short form, e.g. -v
        :param fullName: long form, e.g. --version
        :param usage: what the argument does
        :param alternative: whether the argument is optional
        '''
        self.abbreviation = abbreviation
        self.fullName = fullName
        self.usage = usage
        self.alternative = alternative


class Helper:
    '''
    Help and version information of the command line
    '''

    def __init__(self):
        self.introduce = "iTestGen, generate test inputs from the control-flow graph of a function"
        self.requiredArgslist = ["<source>", "<outputPath>", "<outputName>"]
        self.version = __version__

        self.HelpInfos = []
        self.HelpInfos.append(HelpInfo("", "<source>", "CFG json file of the function under test.", False))
        self.HelpInfos.append(HelpInfo("", "<outputPath>", "Output directory of results.", False))
        self.HelpInfos.append(HelpInfo("", "<outputName>", "File name of the generated test inputs.", False))

        self.HelpInfos.append(HelpInfo("-h", "--help", "Show this help message and exit."))
        self.HelpInfos.append(HelpInfo("-c", "--criterion",
                                       "Paths that get test inputs: all, statement or branch. Default: all."))
        self.HelpInfos.append(
            HelpInfo("-pd", "--process-detail", "Print paths, coverage ground sets and solver results."))
        self.HelpInfos.append(HelpInfo("-g", "--graph", "Write the CFG as Graphviz dot source next to the results."))
        self.HelpInfos.append(HelpInfo("-j", "--jobs", "Number of solver processes. Default: 1."))
        self.HelpInfos.append(HelpInfo("-t", "--timeout", "Solver timeout per path in milliseconds. Default: none."))
        self.HelpInfos.append(HelpInfo("-v", "--version", "Print version information and exit."))

    def getHelpInfo(self):
        res = ""
        res += self.introduce + "\n"
        res += "Usage: iTestGen " + " ".join(self.requiredArgslist) + " ({})".format(
            " | ".join([i.abbreviation for i in self.HelpInfos if i.alternative])) + "\n"
        res += "Notice: the three positional arguments come first, in this order: {}".format(
            " ".join(self.requiredArgslist)) + "\n"
        res += "Options and arguments:\n"
        limit = 80
        for hi in self.HelpInfos:
            res += hi.abbreviation.ljust(5, " ") + hi.fullName.ljust(20, " ")
            lines = [hi.usage[i:i + limit] for i in range(0, len(hi.usage), limit)]
            for i in range(len(lines)):
                if i == 0:
                    res += lines[i] + "\n"
                else:
                    res += " " * 25 + lines[i] + "\n"
        return res

    def getVersion(self):
        return self.version
