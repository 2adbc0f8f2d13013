from iTestGen.Cfg.BasicBlock import BasicBlock
from iTestGen.Cfg.Cfg import Cfg
from iTestGen.Cfg.CfgBuilder import CfgBuilder, CfgFormatError
