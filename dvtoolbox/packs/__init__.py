"""DV subcode packs (IEC 61834-4): binary group, AAUX source, AAUX source control and recording date."""