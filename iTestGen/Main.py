import os
import sys

from iTestGen.Cfg.CfgBuilder import CfgFormatError
from iTestGen.TestGenerator.TestGenerator import TestGenerator, CRITERIA, ALL_PATHS
from iTestGen.Utils.Helper import Helper
from iTestGen.Utils.Logger import Logger


def main(argv: list = None):
    """
    argv:
    argv[1]: input cfg json file
    argv[2]: output directory
    argv[3]: output file name
    followed by the options listed in Helper
    """
    if argv is None:
        argv = sys.argv
    log = Logger()

    h = Helper()
    for arg in argv:  # help and version requests do not generate anything
        if arg in ['-h', "--help"]:
            print(h.getHelpInfo())
            return 0
        elif arg in ['-v', "--version"]:
            print(h.getVersion())
            return 0

    if len(argv) < 4:
        print("Missing arguments, see --help")
        return -1

    # optional arguments
    criterion = ALL_PATHS
    printProcessInfo = False
    outputGraph = False
    processNum = 1
    timeout = None
    i = 4
    while i < len(argv):
        arg = argv[i]
        if arg in ['-pd', '--process-detail']:
            printProcessInfo = True
        elif arg in ['-g', '--graph']:
            outputGraph = True
        elif arg in ['-c', '--criterion', '-j', '--jobs', '-t', '--timeout']:
            if i + 1 >= len(argv):
                print("Missing value for argument: {}".format(arg))
                return -1
            value = argv[i + 1]
            i += 1
            if arg in ['-c', '--criterion']:
                if value not in CRITERIA:
                    print("Unknown criterion: {}, expected one of {}".format(value, " | ".join(CRITERIA)))
                    return -1
                criterion = value
            else:
                if not value.isdigit() or int(value) <= 0:
                    print("Expected a positive integer for {}: {}".format(arg, value))
                    return -1
                if arg in ['-j', '--jobs']:
                    processNum = int(value)
                else:
                    timeout = int(value)
        else:
            print("Wrong argument: {}".format(arg))
            return -1
        i += 1

    inputFile, outputPath, outputName = argv[1], argv[2], argv[3]
    if not os.path.exists(inputFile):
        log.fail("Input file: {} does not exist".format(inputFile))
    if not os.path.isdir(outputPath):
        log.fail("Output path: {} does not exist".format(outputPath))

    generator = TestGenerator(inputFile=inputFile,
                              outputPath=outputPath,
                              outputName=outputName,
                              criterion=criterion,
                              outputProcessInfo=printProcessInfo,
                              outputGraph=outputGraph,
                              processNum=processNum,
                              timeout=timeout)
    try:
        generator.generate()
    except CfgFormatError as e:
        log.fail(str(e))
    return 0


if __name__ == '__main__':
    sys.exit(main())
